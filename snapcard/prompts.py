import json
from typing import Dict

from .icons import IconCategory, PROMPT_ICON_GROUPS
from .models import WEIRD_FLEX_KEY, Card, Category, Rarity, Stat

CATEGORY_VOICE: Dict[Category, str] = {
    Category.HUMAN: (
        "Generate a funny nickname (MAX 4 WORDS). The 'Weird Flex' must be a unique, "
        "funny, and unexpected fact. The lore should be an over-the-top, two-sentence backstory."
    ),
    Category.ANIMAL: (
        "Create a silly but heroic title (MAX 4 WORDS). The 'Weird Flex' must be a unique, "
        "funny, and unexpected fact. The lore should be a ridiculous, two-sentence "
        "evolutionary claim with meta-humor."
    ),
    Category.OBJECT: (
        "Give an epic, meta-aware title to the mundane object (MAX 4 WORDS). The lore should "
        "be a mythic, two-sentence origin story referencing internet culture."
    ),
    Category.FOOD: (
        "Assign a dramatic, pop-culture-inspired battle name (MAX 4 WORDS). The lore should "
        "be a legendary, two-sentence tale about its consumption."
    ),
    Category.RANDOM: (
        "The content must be abstract and reality-bending. The name should be a random, "
        "absurd phrase (MAX 4 WORDS), and the lore should be an unhinged statement about "
        "simulation theory or glitches."
    ),
}

RARITY_RUBRIC: Dict[Rarity, str] = {
    Rarity.COMMON: "Everyday objects, simple photos, generic selfies.",
    Rarity.UNCOMMON: "Interesting compositions, funny pet photos, unique food items.",
    Rarity.RARE: "High-quality photography, very unusual situations or items, expressive portraits.",
    Rarity.EPIC: "Visually stunning images, perfectly timed photos, highly creative or bizarre concepts.",
    Rarity.LEGENDARY: (
        "Truly one-of-a-kind, iconic, or artistically exceptional images that are extremely "
        "rare to come across."
    ),
}

EXAMPLE_CARD = Card(
    name="the card name (MAX 4 WORDS!)",
    category=Category.HUMAN,
    lore="the card lore",
    rarity=Rarity.RARE,
    stats={
        "Physical Strength": Stat(value=75, icon_hint=IconCategory.MUSCLE.value),
        "Battle Experience": Stat(value=92, icon_hint=IconCategory.SWORD.value),
        "Social Charisma": Stat(value=68, icon_hint=IconCategory.SMILE.value),
        WEIRD_FLEX_KEY: Stat(
            value="Can solve a Rubik's cube blindfolded",
            icon_hint=IconCategory.GAMEPAD.value,
        ),
    },
)

CARD_PROMPT_TEMPLATE = """You are an expert at analyzing images to create funny, engaging, and creative stats and lore for a card game.

Analyze the provided image and determine its category from the following options: {categories}.

Then, based on the category and a deep analysis of the visual details in the image (like clothing, expression, environment, species, pose, ingredients, etc.), generate the required content. Your output MUST be directly inspired by the visual information and avoid generic cliches at all costs.

IMPORTANT: Keep names SHORT! Maximum 4 words (like "Sir Floofington the First" or "Captain Thunder Cat"). Long names break the card layout.

You must output ONLY a valid JSON object with this exact structure:
{example}

Use "category" from: {category_values}
Use "rarity" from: {rarity_values}

STAT RULES:
- Generate exactly 4 stats total, including "{weird_flex}".
- ALL stats except "{weird_flex}" must have NUMBER values (1-100).
- "{weird_flex}" must have a funny TEXT value.
- NO text descriptions for numerical stats (avoid "Expert Level", "Legendary", etc.).
- Keep stat names creative but clear, and related to the image.

ICON RULES:
- EVERY stat MUST have an "iconHint" chosen from these categories:
{icon_groups}
- If unsure, use "{default_icon}", but prefer a specific match for the stat concept.

CATEGORY VOICE:
{category_voice}

RARITY:
Assign a rarity based on the visual characteristics of the image. Be consistent for similar types of images.
{rarity_rubric}
Base your decision on factors like image quality, composition, subject matter uniqueness, and emotional impact.

STRICT OUTPUT RULES:
- Output EXACTLY one JSON object.
- Do not output any text before or after the JSON.
- Never wrap the JSON in code fences such as ``` or ```json.
- Do not use trailing commas.
"""


def _quoted(values) -> str:
    return ", ".join(f"'{value}'" for value in values)


def build_card_prompt() -> str:
    """Render the instruction sent alongside the photo.

    Categories, rarities, and icon hints come from the same enums the
    validator checks against, so the two cannot drift apart.
    """
    icon_groups = "\n".join(
        f"  {group}: {', '.join(icon.value for icon in icons)}"
        for group, icons in PROMPT_ICON_GROUPS.items()
    )
    category_voice = "\n".join(
        f"- For '{category.value}': {voice}" for category, voice in CATEGORY_VOICE.items()
    )
    rarity_rubric = "\n".join(
        f"- {rarity.value}: {RARITY_RUBRIC[rarity]}" for rarity in Rarity
    )

    return CARD_PROMPT_TEMPLATE.format(
        categories=_quoted(category.value for category in Category),
        example=json.dumps(EXAMPLE_CARD.to_payload(), indent=2, ensure_ascii=False),
        category_values=", ".join(category.value for category in Category),
        rarity_values=", ".join(rarity.value for rarity in Rarity),
        weird_flex=WEIRD_FLEX_KEY,
        icon_groups=icon_groups,
        default_icon=IconCategory.DEFAULT.value,
        category_voice=category_voice,
        rarity_rubric=rarity_rubric,
    )
