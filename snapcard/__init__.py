"""Snapcard: turn a photo into a validated trading card."""

from .models import WEIRD_FLEX_KEY, Card, Category, Rarity, Stat, validate_card
from .errors import (
    GenerationError,
    InvalidPhotoError,
    MalformedResponseError,
    NoCredentialError,
    SchemaViolationError,
    TransportError,
)
from .icons import IconCategory, LEGACY_STAT_ICONS, resolve_icon
from .image_utils import photo_to_data_url
from .prompts import build_card_prompt
from .post_process import card_warnings, parse_card_text, strip_markdown_fences
from .client import generate_card, resolve_api_key
from .keys import check_api_key
from .summary import CardSummary, card_summary
from .cli import clean_filename, main

__all__ = [
    "WEIRD_FLEX_KEY",
    "Card",
    "Category",
    "Rarity",
    "Stat",
    "validate_card",
    "GenerationError",
    "InvalidPhotoError",
    "MalformedResponseError",
    "NoCredentialError",
    "SchemaViolationError",
    "TransportError",
    "IconCategory",
    "LEGACY_STAT_ICONS",
    "resolve_icon",
    "photo_to_data_url",
    "build_card_prompt",
    "card_warnings",
    "parse_card_text",
    "strip_markdown_fences",
    "generate_card",
    "resolve_api_key",
    "check_api_key",
    "CardSummary",
    "card_summary",
    "clean_filename",
    "main",
]
