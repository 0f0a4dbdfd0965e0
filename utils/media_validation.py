"""Validation helpers for the uploaded face photo."""

import base64
import binascii
from typing import Any, Optional, Tuple

DATA_URL_PREFIX = "data:"
DEFAULT_IMAGE_MIME = "image/jpeg"


def split_data_url(payload: str) -> Tuple[str, Optional[str]]:
    """Strip a `data:<mime>;base64,` prefix, returning the body and the declared MIME type."""
    if not payload.startswith(DATA_URL_PREFIX) or "," not in payload:
        return payload, None
    header, body = payload.split(",", 1)
    mime_type = header[len(DATA_URL_PREFIX):].split(";", 1)[0].strip() or None
    return body, mime_type


def decode_base64_image(payload: Any) -> Tuple[bytes, str]:
    """Decode the base64 image sent by the client.

    Args:
        payload: Base64 text, optionally in data URL form. Anything else is rejected.

    Returns:
        The raw image bytes and their MIME type (JPEG unless a data URL says otherwise).

    Raises:
        ValueError: If the payload is missing, not a string, empty, or not valid base64.
    """
    if payload is None:
        raise ValueError("No image was provided.")
    if not isinstance(payload, str):
        raise ValueError(f"Image must be a base64 string, got {type(payload).__name__}.")
    if not payload.strip():
        raise ValueError("No image was provided.")

    body, mime_type = split_data_url(payload.strip())
    try:
        image_bytes = base64.b64decode("".join(body.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image must be base64-encoded.") from exc

    if not image_bytes:
        raise ValueError("Decoded image is empty.")
    return image_bytes, mime_type or DEFAULT_IMAGE_MIME
