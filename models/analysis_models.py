"""Per-request domain models for the face analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class ImageInput:
    """Raw image bytes plus the MIME type sent to the model."""

    data: bytes
    mime_type: str = "image/jpeg"


@dataclass
class InboundRequest:
    """Validated request handed to the pipeline.

    Attributes:
        caller_identity: Authenticated user id, also used to tag log lines.
        image: Decoded photograph submitted by the caller.
    """

    caller_identity: str
    image: ImageInput


@dataclass
class TextPart:
    """Free text emitted by the model."""

    text: str


@dataclass
class InlineImagePart:
    """Inline binary image emitted by the model."""

    data: bytes
    mime_type: str = "image/png"


ResponsePart = Union[TextPart, InlineImagePart]


@dataclass
class GatewayResponse:
    """Ordered content parts returned by a model gateway.

    Attributes:
        parts: Content parts in the order the model produced them.
        prompt_feedback: Optional block/finish diagnostics, only used for logging.
    """

    parts: List[ResponsePart] = field(default_factory=list)
    prompt_feedback: Optional[str] = None


@dataclass
class ParsedSuggestion:
    """Recommendation read from the model's JSON block."""

    recommendation_text: str
    analysis: Optional[Dict[str, Any]] = None


@dataclass
class AnalysisResult:
    """Success payload returned to the caller."""

    suggestion_text: str
    edited_image_base64: str

    def to_payload(self) -> Dict[str, str]:
        """Return the wire representation of the result."""
        return {
            "suggestionText": self.suggestion_text,
            "editedImageBase64": self.edited_image_base64,
        }
