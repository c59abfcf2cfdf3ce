from typing import Any, Callable, Dict, Optional

import openai
from openai import OpenAI

from .config import (
    DEFAULT_TEMPERATURE,
    default_api_key,
    default_base_url,
    default_model,
    default_timeout,
)
from .errors import GenerationError, NoCredentialError, TransportError
from .image_utils import Photo, photo_to_data_url
from .models import Card, validate_card
from .post_process import card_warnings, parse_card_text
from .prompts import build_card_prompt
from .utils import get_logger

LOGGER = get_logger(__name__)

MAX_OUTPUT_TOKENS = 1024

ClientFactory = Callable[..., Any]


def build_client(
    *, api_key: str, base_url: Optional[str] = None, timeout: Optional[float] = None
) -> OpenAI:
    # Retries are the caller's policy, not the SDK's.
    return OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)


def resolve_api_key(api_key: Optional[str] = None) -> str:
    """Prefer the caller's key, then the environment default."""
    if api_key and api_key.strip():
        LOGGER.info("Using caller-supplied API key")
        return api_key.strip()

    env_key = default_api_key()
    if env_key:
        LOGGER.info("Using API key from the environment")
        return env_key

    raise NoCredentialError("No API key available for card generation.")


def _extract_text_from_responses(response: Any) -> str:
    """Extract the text blob from a Responses API response."""
    try:
        output = response.output
        text = None
        for item in output:
            if item.type == "message":
                for content in item.content:
                    if content.type == "output_text":
                        text = content.text
                        break
            if text is not None:
                break
    except (AttributeError, TypeError) as exc:
        raise TransportError("Unexpected response structure from the Responses API.") from exc

    return text or ""


def _extract_text_from_chat(response: Any) -> str:
    """Extract the text blob from a Chat Completions response."""
    try:
        choice = response.choices[0]
        content = choice.message.content
        if isinstance(content, list):
            # Multi-part message; concatenate any text parts
            content = "".join(part.get("text", "") for part in content if isinstance(part, dict))
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        raise TransportError("Unexpected response structure from the Chat Completions API.") from exc

    return content or ""


def _is_unsupported_error(exc: Exception) -> bool:
    """Return True if an exception means the Responses API is not available."""

    message = str(exc)
    if isinstance(exc, openai.NotFoundError):
        # An unknown model is also a 404; only a missing endpoint falls back.
        return "/responses" in message
    return "responses" in message or "'text'" in message


def _responses_input_to_messages(request_input: Any) -> Any:
    messages = []
    for item in request_input:
        contents = []
        for content in item["content"]:
            if content["type"] == "input_text":
                contents.append({"type": "text", "text": content["text"]})
            elif content["type"] == "input_image":
                contents.append({"type": "image_url", "image_url": {"url": content["image_url"]}})
        messages.append({"role": item["role"], "content": contents})
    return messages


def _create_response_with_fallback(client: Any, request_kwargs: Dict[str, Any]) -> str:
    """Attempt a Responses API call, falling back to Chat Completions when unsupported."""

    try:
        response = client.responses.create(**request_kwargs)
        return _extract_text_from_responses(response)
    except (TypeError, AttributeError, openai.NotFoundError) as exc:
        if not _is_unsupported_error(exc):
            raise
        LOGGER.debug("Responses API unavailable (%s); using Chat Completions", exc)

    chat_kwargs: Dict[str, Any] = {
        "model": request_kwargs["model"],
        "messages": _responses_input_to_messages(request_kwargs["input"]),
        "temperature": request_kwargs.get("temperature", DEFAULT_TEMPERATURE),
    }

    if "max_output_tokens" in request_kwargs:
        chat_kwargs["max_tokens"] = request_kwargs["max_output_tokens"]

    response = client.chat.completions.create(**chat_kwargs)
    return _extract_text_from_chat(response)


def request_card_text(
    client: Any,
    data_url: str,
    prompt: str,
    *,
    model: str,
    temperature: float = DEFAULT_TEMPERATURE,
) -> str:
    """Send the prompt and photo to the model and return its raw text.

    Any API or network failure is raised as :class:`TransportError`.
    """
    request_kwargs: Dict[str, Any] = {
        "model": model,
        "input": [
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": prompt},
                    {"type": "input_image", "image_url": data_url},
                ],
            },
        ],
        "max_output_tokens": MAX_OUTPUT_TOKENS,
        "temperature": temperature,
        "text": {"format": {"type": "json_object"}},
    }

    try:
        return _create_response_with_fallback(client, request_kwargs)
    except openai.APITimeoutError as exc:
        raise TransportError(f"Model call timed out: {exc}") from exc
    except openai.APIStatusError as exc:
        raise TransportError(f"Model call failed with status {exc.status_code}: {exc.message}") from exc
    except openai.OpenAIError as exc:
        raise TransportError(f"Model call failed: {exc}") from exc
    except (ValueError, AttributeError, TypeError) as exc:
        raise TransportError(f"Model reply could not be decoded: {exc}") from exc


def generate_card(
    photo: Photo,
    api_key: Optional[str] = None,
    *,
    model: Optional[str] = None,
    temperature: float = DEFAULT_TEMPERATURE,
    timeout: Optional[float] = None,
    base_url: Optional[str] = None,
    client_factory: Optional[ClientFactory] = None,
) -> Card:
    """Turn a photo into a validated :class:`Card`.

    Steps run in order and each one fails with its own
    :class:`~snapcard.errors.GenerationError` subclass:

    1. resolve the API key (``NoCredentialError``, before any network call)
    2. encode the photo (``InvalidPhotoError``)
    3. call the model once (``TransportError``)
    4. strip fences and parse JSON (``MalformedResponseError``)
    5. validate against the card schema (``SchemaViolationError``)

    There is no retry and no caching; wrap this call for either.
    """
    model = model or default_model()
    try:
        resolved_key = resolve_api_key(api_key)
        data_url = photo_to_data_url(photo)
        prompt = build_card_prompt()

        factory = client_factory or build_client
        client = factory(
            api_key=resolved_key,
            base_url=base_url or default_base_url(),
            timeout=timeout if timeout is not None else default_timeout(),
        )

        LOGGER.info("Generating card with model %s", model)
        text = request_card_text(client, data_url, prompt, model=model, temperature=temperature)
        parsed = parse_card_text(text)
        card = validate_card(parsed)
    except GenerationError as exc:
        LOGGER.warning("Card generation failed (%s): %s", type(exc).__name__, exc)
        raise

    for warning in card_warnings(card):
        LOGGER.warning("Card %r: %s", card.name, warning)

    LOGGER.info("Generated %s %s card %r", card.rarity.value, card.category.value, card.name)
    return card
