import json
import re
from typing import Any, List

from .errors import MalformedResponseError
from .models import Card

EXPECTED_STAT_COUNT = 4
STAT_MIN = 1
STAT_MAX = 100

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_markdown_fences(text: str) -> str:
    """Remove ``` or ```json fences if the model insists on adding them."""
    text = text.strip()

    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text, count=1).strip()

    if text.endswith("```"):
        text = _CLOSING_FENCE.sub("", text, count=1).strip()

    return text


def parse_card_text(text: str) -> Any:
    """Turn raw model text into parsed JSON.

    Fences are stripped first. Anything that still is not JSON raises
    :class:`MalformedResponseError`; whether the JSON has the right shape is
    for :func:`snapcard.models.validate_card` to decide.
    """
    cleaned = strip_markdown_fences(text or "")
    if not cleaned:
        raise MalformedResponseError("Model returned no text.", raw_text=text or "")

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(
            f"Model output was not valid JSON: {exc.msg} at line {exc.lineno} column {exc.colno}",
            raw_text=text,
        ) from exc
    except ValueError as exc:
        # e.g. an integer literal past the int/str conversion digit limit
        raise MalformedResponseError(f"Model output was not usable JSON: {exc}", raw_text=text) from exc


def card_warnings(card: Card) -> List[str]:
    """List the ways a valid card strays from what the prompt asked for.

    None of these fail validation; they are reported so drift in model output
    shows up in the logs.
    """
    warnings: List[str] = []

    if len(card.stats) != EXPECTED_STAT_COUNT:
        warnings.append(
            f"expected {EXPECTED_STAT_COUNT} stats, got {len(card.stats)}"
        )

    if card.weird_flex is None:
        warnings.append("no Weird Flex stat")

    for key, stat in card.stats.items():
        if stat.is_numeric:
            if not STAT_MIN <= stat.value <= STAT_MAX:
                warnings.append(
                    f"stat {key!r} value {stat.value} is outside {STAT_MIN}-{STAT_MAX}"
                )
        elif card.weird_flex is None or key != card.weird_flex[0]:
            warnings.append(f"stat {key!r} has a text value")

    return warnings
