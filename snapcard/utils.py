"""Small helpers shared across the snapcard package."""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Optional

LOGGER_NAME = "snapcard"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module level logger configured for the package."""
    logger_name = name or LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(levelname)s] %(name)s: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any) -> Optional[int]:
    """Read the leading integer of ``value`` ("12 cans" -> 12), or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # past the int/str conversion digit limit
        return None
