from snapcard.models import Card, Category, Rarity, Stat, validate_card
from snapcard.summary import card_summary, meme_tier


def test_summary_ignores_weird_flex(card_payload):
    summary = card_summary(validate_card(card_payload))

    assert summary.total_power == 256
    assert summary.stat_average == 85
    assert summary.rarity_multiplier == "2x"
    assert summary.category_bonus == "+10%"
    assert summary.meme_tier == "S-Tier"
    assert summary.battle_rating == 307


def test_summary_counts_numeric_text_and_zeroes_the_rest():
    card = Card(
        name="Leftover Pizza",
        category=Category.FOOD,
        stats={
            "Grease Factor": Stat(value="12", icon_hint="coffee"),
            "Cheese Pull": Stat(value="Legendary", icon_hint="pizza"),
            "Crust Integrity": Stat(value=18, icon_hint="shield"),
        },
        lore="Nobody remembers ordering it. Everyone remembers eating it.",
        rarity=Rarity.COMMON,
    )

    summary = card_summary(card)

    assert summary.total_power == 30
    assert summary.stat_average == 10
    assert summary.meme_tier == "C-Tier"
    assert summary.battle_rating == 30
    assert summary.category_bonus == "+20%"


def test_summary_without_main_stats():
    card = Card(
        name="The Void",
        category=Category.RANDOM,
        stats={"Weird Flex": Stat(value="Exists", icon_hint="eye")},
        lore="It stares back. It has no stats.",
        rarity=Rarity.LEGENDARY,
    )

    summary = card_summary(card)

    assert summary.total_power == 0
    assert summary.stat_average == 0
    assert summary.meme_tier == "D-Tier"
    assert summary.rarity_multiplier == "3x"
    assert summary.to_dict()["Battle Rating"] == 0


def test_meme_tier_thresholds_are_exclusive():
    assert meme_tier(81) == "S-Tier"
    assert meme_tier(80) == "A-Tier"
    assert meme_tier(41) == "B-Tier"
    assert meme_tier(20) == "D-Tier"


def test_text_stats_count_their_leading_number():
    card = Card(
        name="Soda Stash",
        category=Category.OBJECT,
        stats={
            "Fizz": Stat(value="12 cans", icon_hint="coffee"),
            "Sugar Rush": Stat(value=" 30%", icon_hint="lightning"),
            "Weird Flex": Stat(value="Opened one with a spoon", icon_hint="flex"),
        },
        lore="It hums at night. The fridge is afraid.",
        rarity=Rarity.UNCOMMON,
    )

    summary = card_summary(card)

    assert summary.total_power == 42
    assert summary.stat_average == 21
    assert summary.battle_rating == 46


def test_huge_stat_values_do_not_overflow(card_payload):
    card_payload["stats"]["Zoomies"]["value"] = 10**400

    summary = card_summary(validate_card(card_payload))

    assert summary.total_power == 10**400 + 183
    assert summary.meme_tier == "S-Tier"
