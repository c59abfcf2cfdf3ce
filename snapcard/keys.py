"""Check whether an API key is usable before generating cards."""

from typing import Optional

import openai

from .client import ClientFactory, build_client
from .config import KEY_CHECK_TIMEOUT, default_base_url
from .utils import get_logger

LOGGER = get_logger(__name__)


def check_api_key(
    api_key: Optional[str],
    *,
    base_url: Optional[str] = None,
    timeout: float = KEY_CHECK_TIMEOUT,
    client_factory: Optional[ClientFactory] = None,
) -> bool:
    """Return True if ``api_key`` can list the provider's models.

    This is advisory: every failure (rejected key, other status, network
    error, timeout, unreadable response) comes back as False instead of an
    exception. One request, no retries.
    """
    if not api_key or not api_key.strip():
        return False

    factory = client_factory or build_client
    client = factory(
        api_key=api_key.strip(),
        base_url=base_url or default_base_url(),
        timeout=timeout,
    )

    try:
        client.models.list()
    except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
        LOGGER.info("API key rejected (status %s)", exc.status_code)
        return False
    except openai.APIStatusError as exc:
        LOGGER.warning("API key check failed with status %s", exc.status_code)
        return False
    except openai.OpenAIError as exc:
        LOGGER.warning("API key check failed: %s", exc)
        return False
    except (ValueError, AttributeError, TypeError) as exc:
        # 200 with a body the SDK could not read as a models list
        LOGGER.warning("API key check got an unreadable response: %s", exc)
        return False

    return True
