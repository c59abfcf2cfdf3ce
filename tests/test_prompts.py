import json

from snapcard.icons import PROMPT_ICON_GROUPS
from snapcard.models import Category, Rarity, validate_card
from snapcard.prompts import CATEGORY_VOICE, EXAMPLE_CARD, RARITY_RUBRIC, build_card_prompt


def test_prompt_lists_every_category_and_rarity():
    prompt = build_card_prompt()

    for category in Category:
        assert f"'{category.value}'" in prompt
    for rarity in Rarity:
        assert f"- {rarity.value}: {RARITY_RUBRIC[rarity]}" in prompt


def test_rarity_rubric_is_listed_lowest_first():
    prompt = build_card_prompt()

    positions = [prompt.index(f"- {rarity.value}:") for rarity in Rarity]

    assert positions == sorted(positions)


def test_prompt_lists_every_advertised_icon_hint():
    prompt = build_card_prompt()

    for icons in PROMPT_ICON_GROUPS.values():
        for icon in icons:
            assert icon.value in prompt
    assert '"default"' in prompt


def test_prompt_states_stat_and_output_rules():
    prompt = build_card_prompt()

    assert "exactly 4 stats" in prompt
    assert '"Weird Flex"' in prompt
    assert "ONLY a valid JSON object" in prompt
    assert "code fences" in prompt
    for voice in CATEGORY_VOICE.values():
        assert voice in prompt


def test_example_in_prompt_satisfies_the_schema():
    example = EXAMPLE_CARD.to_payload()

    assert json.dumps(example, indent=2, ensure_ascii=False) in build_card_prompt()
    assert validate_card(example) == EXAMPLE_CARD
    assert len(example["stats"]) == 4
