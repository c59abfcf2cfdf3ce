"""Environment-driven defaults.

Values are read at call time so tests and long-running callers see changes to
the environment without re-importing the package.
"""

import os
from typing import Optional

API_KEY_ENV_VARS = ("OPENAI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY")

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.8
DEFAULT_TIMEOUT = 60.0
KEY_CHECK_TIMEOUT = 10.0


def default_api_key() -> Optional[str]:
    """Return the first non-blank API key found in the environment."""
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def default_model() -> str:
    return os.environ.get("SNAPCARD_MODEL", "").strip() or DEFAULT_MODEL


def default_base_url() -> Optional[str]:
    """Optional OpenAI-compatible endpoint, e.g. Gemini's ``/v1beta/openai/``."""
    return os.environ.get("SNAPCARD_BASE_URL", "").strip() or None


def default_timeout() -> float:
    raw = os.environ.get("SNAPCARD_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT
