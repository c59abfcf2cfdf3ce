import math
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .errors import SchemaViolationError
from .icons import IconCategory, resolve_icon

WEIRD_FLEX_KEY = "Weird Flex"


class Category(str, Enum):
    """What the photo shows. Picks the voice of the generated stats and lore."""

    HUMAN = "Human"
    ANIMAL = "Animal"
    OBJECT = "Object"
    FOOD = "Food"
    RANDOM = "Random"


class Rarity(str, Enum):
    """Card rarity, declared from lowest to highest rank."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"

    @property
    def rank(self) -> int:
        return list(Rarity).index(self)


def _is_legacy(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("legacy"))


def _requires_icon_hint(info: ValidationInfo) -> bool:
    # Only validate_card passes a context; direct construction stays permissive.
    return info.context is not None and not info.context.get("legacy")


class Stat(BaseModel):
    """A single stat on a card.

    - value: a 1-100 score, or free text for the "Weird Flex" stat.
    - icon_hint: icon tag picked by the model (JSON key ``iconHint``). Older
      cards stored bare values without a hint.
    """

    model_config = ConfigDict(populate_by_name=True)

    value: Union[int, float, str]
    icon_hint: Optional[str] = Field(default=None, alias="iconHint")

    @model_validator(mode="before")
    @classmethod
    def _accept_shape(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, Stat):
            return data

        if not isinstance(data, dict):
            if _is_legacy(info):
                return {"value": data}
            return data

        if _requires_icon_hint(info) and data.get("iconHint", data.get("icon_hint")) is None:
            raise ValueError("stat is missing iconHint")
        return data

    @field_validator("value", mode="before")
    @classmethod
    def _check_value(cls, value: Any) -> Any:
        # bool is an int subclass; JSON true/false is not a score.
        if isinstance(value, bool):
            raise ValueError("stat value must be a number or text, not a boolean")
        if isinstance(value, (int, float)):
            # ints have arbitrary precision and cannot overflow here
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError("numeric stat value must be finite")
            return value
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("text stat value must not be empty")
            return value
        raise ValueError("stat value must be a number or text")

    @property
    def is_numeric(self) -> bool:
        return not isinstance(self.value, str)


class Card(BaseModel):
    """A generated trading card."""

    name: str
    category: Category
    stats: Dict[str, Stat]
    lore: str
    rarity: Rarity

    @field_validator("name", "lore")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("stats")
    @classmethod
    def _not_empty(cls, value: Dict[str, Stat]) -> Dict[str, Stat]:
        if not value:
            raise ValueError("card needs at least one stat")
        return value

    @property
    def weird_flex(self) -> Optional[Tuple[str, Stat]]:
        """The reserved text stat, matched case-insensitively on its key."""
        needle = WEIRD_FLEX_KEY.lower()
        for key, stat in self.stats.items():
            if needle in key.lower():
                return key, stat
        return None

    @property
    def main_stats(self) -> Dict[str, Stat]:
        needle = WEIRD_FLEX_KEY.lower()
        return {key: stat for key, stat in self.stats.items() if needle not in key.lower()}

    def stat_icons(self) -> Dict[str, IconCategory]:
        return {key: resolve_icon(stat.icon_hint, key) for key, stat in self.stats.items()}

    def to_payload(self) -> Dict[str, Any]:
        """Dump back to the JSON shape the model produces."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _error_path(loc: Tuple[Union[int, str], ...]) -> str:
    return ".".join(str(part) for part in loc)


def validate_card(candidate: Any, *, legacy: bool = False) -> Card:
    """Validate parsed model output and return a :class:`Card`.

    The schema is lenient about how many stats there are and what they are
    called, and strict about stat shape and the category/rarity enums. With
    ``legacy=True``, bare stat values and stats without ``iconHint`` are
    accepted.

    Raises :class:`SchemaViolationError` naming the first offending field.
    """
    try:
        return Card.model_validate(candidate, context={"legacy": legacy})
    except ValidationError as exc:
        first = exc.errors()[0]
        raise SchemaViolationError(_error_path(first["loc"]), first["msg"]) from exc
