import base64
import binascii
import io
import re
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from .errors import InvalidPhotoError

MAX_DIMENSION = 1024
JPEG_QUALITY = 85

_DATA_URL = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)

Photo = Union[bytes, bytearray, str, Path]


def _encode_image(img: Image.Image) -> str:
    """Return a JPEG-compressed data URL for an open image."""

    img = img.convert("RGB")
    img.thumbnail((MAX_DIMENSION, MAX_DIMENSION), Image.LANCZOS)

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=JPEG_QUALITY, optimize=True)
    payload = buffer.getvalue()

    b64 = base64.b64encode(payload).decode("ascii")
    return f"data:image/jpeg;base64,{b64}"


def image_to_data_url(image_path: Path) -> str:
    """Return a JPEG-compressed data URL for the image at ``image_path``."""

    try:
        with Image.open(image_path) as img:
            return _encode_image(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidPhotoError(f"Could not read image {image_path}: {exc}") from exc


def bytes_to_data_url(data: bytes) -> str:
    """Return a JPEG-compressed data URL for raw image bytes."""

    if not data:
        raise InvalidPhotoError("Photo is empty.")
    try:
        with Image.open(io.BytesIO(data)) as img:
            return _encode_image(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidPhotoError(f"Photo bytes are not a readable image: {exc}") from exc


def check_data_url(data_url: str) -> str:
    """Return ``data_url`` unchanged if it is a base64 ``data:image/...`` URI."""

    match = _DATA_URL.match(data_url.strip())
    if not match:
        raise InvalidPhotoError(
            "Photo string must be a data URI of the form 'data:<image mimetype>;base64,<data>'."
        )
    try:
        base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidPhotoError(f"Photo data URI is not valid base64: {exc}") from exc
    return data_url.strip()


def photo_to_data_url(photo: Photo) -> str:
    """Encode a photo for the model.

    Accepts raw bytes, a path, or a ready-made image data URI. Bytes and files
    are re-encoded as JPEG no larger than 1024px on the long side; data URIs
    are checked and passed through as-is.
    """

    if isinstance(photo, (bytes, bytearray)):
        return bytes_to_data_url(bytes(photo))
    if isinstance(photo, Path):
        return image_to_data_url(photo)
    if isinstance(photo, str):
        if photo.strip().startswith("data:"):
            return check_data_url(photo)
        return image_to_data_url(Path(photo))
    raise InvalidPhotoError(f"Unsupported photo type: {type(photo).__name__}")
