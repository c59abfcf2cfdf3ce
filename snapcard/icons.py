"""Map icon hints and stat names onto a fixed set of icon categories."""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple


class IconCategory(str, Enum):
    """Every icon a stat can be drawn with."""

    # Elements
    FIRE = "fire"
    ICE = "ice"
    LIGHTNING = "lightning"
    WATER = "water"
    EARTH = "earth"
    AIR = "air"
    SUN = "sun"
    MOON = "moon"
    LEAF = "leaf"
    MOUNTAIN = "mountain"
    SNOW = "snow"

    # Emotions & expressions
    HEART = "heart"
    SMILE = "smile"
    SLEEP = "sleep"
    EYE = "eye"

    # Combat & power
    SWORD = "sword"
    SHIELD = "shield"
    MAGIC = "magic"
    BOMB = "bomb"
    SKULL = "skull"
    MUSCLE = "muscle"
    FIST = "fist"
    FLEX = "flex"
    BOLT = "bolt"
    SPEED = "speed"

    # Tech & modern
    ROCKET = "rocket"
    CAMERA = "camera"
    GAMEPAD = "gamepad"
    COG = "cog"
    GEAR = "gear"

    # Special & rare
    STAR = "star"
    GEM = "gem"
    DIAMOND = "diamond"
    CRYSTAL = "crystal"
    FEATHER = "feather"

    # Food & drink
    PIZZA = "pizza"
    COFFEE = "coffee"
    UTENSILS = "utensils"
    SPICE = "spice"
    FOOD = "food"
    DRINK = "drink"
    HAMBURGER = "hamburger"

    # Animals
    CAT = "cat"
    DOG = "dog"
    FISH = "fish"
    SPIDER = "spider"

    # Arts
    MUSIC = "music"
    FILM = "film"
    PALETTE = "palette"
    ART = "art"

    HANDS = "hands"
    DEFAULT = "default"


# Hints advertised to the model, grouped the way the prompt lists them.
PROMPT_ICON_GROUPS: Dict[str, List[IconCategory]] = {
    "PHYSICAL": [
        IconCategory.MUSCLE,
        IconCategory.BOLT,
        IconCategory.SPEED,
        IconCategory.FIST,
        IconCategory.HEART,
        IconCategory.SHIELD,
        IconCategory.ROCKET,
    ],
    "COMBAT": [
        IconCategory.SWORD,
        IconCategory.BOMB,
        IconCategory.SKULL,
        IconCategory.MAGIC,
        IconCategory.GEM,
        IconCategory.DIAMOND,
        IconCategory.CRYSTAL,
        IconCategory.STAR,
    ],
    "PERSONALITY": [
        IconCategory.SMILE,
        IconCategory.EYE,
        IconCategory.SLEEP,
        IconCategory.SPICE,
        IconCategory.GAMEPAD,
        IconCategory.MUSIC,
        IconCategory.CAMERA,
        IconCategory.ART,
    ],
    "ABILITIES": [
        IconCategory.FEATHER,
        IconCategory.COG,
        IconCategory.GEAR,
        IconCategory.SUN,
        IconCategory.MOON,
        IconCategory.FLEX,
    ],
    "FOOD": [
        IconCategory.PIZZA,
        IconCategory.COFFEE,
        IconCategory.UTENSILS,
        IconCategory.FOOD,
        IconCategory.DRINK,
        IconCategory.HAMBURGER,
    ],
    "ANIMAL": [
        IconCategory.CAT,
        IconCategory.DOG,
        IconCategory.FISH,
        IconCategory.SPIDER,
    ],
    "ELEMENTAL": [
        IconCategory.FIRE,
        IconCategory.WATER,
        IconCategory.ICE,
        IconCategory.LIGHTNING,
        IconCategory.EARTH,
        IconCategory.AIR,
        IconCategory.LEAF,
        IconCategory.MOUNTAIN,
        IconCategory.SNOW,
    ],
    "SPECIAL": [
        IconCategory.FILM,
        IconCategory.PALETTE,
    ],
}

# Stat names used before the model picked its own icon hints.
LEGACY_STAT_ICONS: Dict[str, IconCategory] = {
    # Human
    "Coolness": IconCategory.SPICE,
    "Snack Resistance": IconCategory.PIZZA,
    "Weird Flex": IconCategory.FLEX,
    "Boss Fight Potential": IconCategory.SWORD,
    # Animal
    "Cuteness Overload": IconCategory.HEART,
    "Chaos Energy": IconCategory.LIGHTNING,
    "Nap Power": IconCategory.SLEEP,
    "Snack Acquisition Skill": IconCategory.HAMBURGER,
    # Object
    "Durability": IconCategory.SHIELD,
    "Vibe Strength": IconCategory.MAGIC,
    "Danger to Humanity": IconCategory.BOMB,
    "Secret Powers": IconCategory.GEM,
    # Food
    "Flavor Explosion": IconCategory.FIRE,
    "Grease Factor": IconCategory.COFFEE,
    "Resistance to Sharing": IconCategory.HANDS,
    "Post-Meal Regret": IconCategory.SKULL,
    # Random
    "Absurdity Level": IconCategory.EYE,
    "Meme Potential": IconCategory.CAMERA,
    "Viral Energy": IconCategory.ROCKET,
    "Reality-Breaking Power": IconCategory.COG,
}

# Order matters: buckets overlap on substrings and the first match wins.
STAT_NAME_KEYWORDS: List[Tuple[Tuple[str, ...], IconCategory]] = [
    (("strength", "power", "muscle"), IconCategory.MUSCLE),
    (("speed", "fast", "quick", "agility"), IconCategory.SPEED),
    (("defense", "shield", "armor", "protection"), IconCategory.SHIELD),
    (("health", "life", "vitality", "hp"), IconCategory.HEART),
    (("intelligence", "smart", "wisdom", "brain"), IconCategory.COG),
    (("magic", "mystical", "spell", "mana"), IconCategory.MAGIC),
    (("luck", "fortune", "chance"), IconCategory.STAR),
    (("charisma", "charm", "social", "appeal"), IconCategory.SMILE),
    (("energy", "stamina", "endurance"), IconCategory.LIGHTNING),
    (("food", "eat", "hunger", "taste"), IconCategory.UTENSILS),
    (("cool", "style", "swag", "vibe"), IconCategory.SPICE),
    (("cute", "adorable", "sweet"), IconCategory.HEART),
    (("danger", "scary", "threat", "fear"), IconCategory.SKULL),
    (("weird", "strange", "odd", "flex"), IconCategory.FLEX),
]


def icon_from_hint(icon_hint: Optional[str]) -> IconCategory:
    """Look up a hint, returning ``DEFAULT`` when it is missing or unknown."""
    if not icon_hint:
        return IconCategory.DEFAULT
    key = str(icon_hint).strip().lower()
    try:
        return IconCategory(key)
    except ValueError:
        return IconCategory.DEFAULT


def icon_from_stat_name(stat_name: Optional[str]) -> IconCategory:
    """Infer an icon from a stat name via the legacy table, then keywords."""
    if not stat_name:
        return IconCategory.DEFAULT

    stat_name = str(stat_name)
    legacy = LEGACY_STAT_ICONS.get(stat_name)
    if legacy is not None:
        return legacy

    lowered = stat_name.lower()
    for keywords, category in STAT_NAME_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category

    return IconCategory.DEFAULT


def resolve_icon(
    icon_hint: Optional[str] = None, stat_name: Optional[str] = None
) -> IconCategory:
    """Pick the icon for a stat. Never fails.

    An explicit hint wins; a hint of ``"default"`` counts as no hint so the
    stat name still gets a chance.
    """
    from_hint = icon_from_hint(icon_hint)
    if from_hint is not IconCategory.DEFAULT:
        return from_hint
    return icon_from_stat_name(stat_name)
