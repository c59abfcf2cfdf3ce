"""Failure kinds raised by card generation."""
from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for every failure of :func:`snapcard.client.generate_card`."""


class NoCredentialError(GenerationError):
    """Neither a caller-supplied nor a default API key is available."""


class InvalidPhotoError(GenerationError):
    """The photo could not be decoded into an image payload."""


class TransportError(GenerationError):
    """The model call failed at the network or API layer."""


class MalformedResponseError(GenerationError):
    """The model text is not JSON, even after stripping code fences."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class SchemaViolationError(GenerationError):
    """Parsed model output does not satisfy the card schema.

    ``path`` is the dotted location of the first offending field, e.g.
    ``"category"`` or ``"stats.Weird Flex.value"``.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
        self.reason = message
