"""Derived figures shown alongside a card."""

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict

from .models import Card, Category, Rarity
from .utils import coerce_int

RARITY_MULTIPLIERS: Dict[Rarity, str] = {
    Rarity.COMMON: "1x",
    Rarity.UNCOMMON: "1.5x",
    Rarity.RARE: "2x",
    Rarity.EPIC: "2.5x",
    Rarity.LEGENDARY: "3x",
}

BATTLE_RATING_FACTORS: Dict[Rarity, float] = {
    Rarity.COMMON: 1.0,
    Rarity.UNCOMMON: 1.1,
    Rarity.RARE: 1.2,
    Rarity.EPIC: 1.3,
    Rarity.LEGENDARY: 1.5,
}

CATEGORY_BONUSES: Dict[Category, str] = {
    Category.HUMAN: "+15%",
    Category.ANIMAL: "+10%",
    Category.OBJECT: "+5%",
    Category.FOOD: "+20%",
    Category.RANDOM: "+12%",
}

# (exclusive lower bound on total power, tier), checked top-down
MEME_TIERS = [
    (80, "S-Tier"),
    (60, "A-Tier"),
    (40, "B-Tier"),
    (20, "C-Tier"),
]


@dataclass
class CardSummary:
    total_power: int
    stat_average: int
    rarity_multiplier: str
    category_bonus: str
    meme_tier: str
    battle_rating: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "Total Power": self.total_power,
            "Stat Average": self.stat_average,
            "Rarity Multiplier": self.rarity_multiplier,
            "Category Bonus": self.category_bonus,
            "Meme Tier": self.meme_tier,
            "Battle Rating": self.battle_rating,
        }


def meme_tier(total) -> str:
    for threshold, tier in MEME_TIERS:
        if total > threshold:
            return tier
    return "D-Tier"


def card_summary(card: Card) -> CardSummary:
    """Summarize every stat except "Weird Flex".

    Text values count by their leading whole number ("12 cans" is 12), or 0
    when they have none. Sums are exact, so huge stat values cannot overflow.
    """
    main_stats = card.main_stats

    total = Fraction(0)
    for stat in main_stats.values():
        if stat.is_numeric:
            total += Fraction(stat.value)
        else:
            total += coerce_int(stat.value) or 0

    average = round(total / len(main_stats)) if main_stats else 0
    factor = Fraction(str(BATTLE_RATING_FACTORS[card.rarity]))

    return CardSummary(
        total_power=round(total),
        stat_average=average,
        rarity_multiplier=RARITY_MULTIPLIERS[card.rarity],
        category_bonus=CATEGORY_BONUSES[card.category],
        meme_tier=meme_tier(total),
        battle_rating=round(total * factor),
    )
