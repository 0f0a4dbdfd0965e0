"""Locate the text and image parts in a gateway response."""

from typing import Iterable, Optional, Tuple

from models.analysis_models import InlineImagePart, ResponsePart, TextPart


def extract_parts(parts: Iterable[ResponsePart]) -> Tuple[Optional[str], Optional[InlineImagePart]]:
    """Return the first non-empty text and the first inline image, each independently.

    Empty text parts are skipped and the chosen text is trimmed; text that trims
    to nothing counts as missing. An image part without data counts as missing.
    When the model returns several parts of one kind, the first one wins.
    """
    text: Optional[str] = None
    image: Optional[InlineImagePart] = None

    for part in parts:
        if text is None and isinstance(part, TextPart) and part.text:
            text = part.text.strip()
        elif image is None and isinstance(part, InlineImagePart):
            image = part
        if text is not None and image is not None:
            break

    if image is not None and not image.data:
        image = None
    return text or None, image
