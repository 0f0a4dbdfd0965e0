"""Error taxonomy for the face analysis pipeline.

Every failure the pipeline can report is an `AnalysisError` subclass. Each
subclass pins one `ErrorKind`, and each kind maps to exactly one
caller-visible status. The message carried by an error is always a fixed,
generic string; raw model output only ever goes to the logs.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class CallerStatus(str, Enum):
    """Statuses exposed to callers, with their HTTP codes."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL = "INTERNAL"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS: Dict[CallerStatus, int] = {
    CallerStatus.UNAUTHENTICATED: 401,
    CallerStatus.INVALID_ARGUMENT: 400,
    CallerStatus.PERMISSION_DENIED: 403,
    CallerStatus.INTERNAL: 500,
}


class ErrorKind(str, Enum):
    """Every way a request can fail."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid_argument"
    GATEWAY_SAFETY_BLOCK = "gateway_safety_block"
    GATEWAY_FAILURE = "gateway_failure"
    MISSING_RESPONSE_TEXT = "missing_response_text"
    MALFORMED_SUGGESTION_TEXT = "malformed_suggestion_text"
    INVALID_SUGGESTION_JSON = "invalid_suggestion_json"
    MISSING_RECOMMENDATION_FIELD = "missing_recommendation_field"
    MISSING_RESPONSE_IMAGE = "missing_response_image"
    INTERNAL = "internal"


class AnalysisError(Exception):
    """Base class for classified pipeline failures."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status: CallerStatus = CallerStatus.INTERNAL
    default_message: str = "The analysis could not be completed."

    def __init__(self, message: Optional[str] = None, *, caller_identity: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.caller_identity = caller_identity
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Dict[str, str]]:
        """Return the error body sent to the caller."""
        return {"error": {"status": self.status.value, "message": self.message}}


class Unauthenticated(AnalysisError):
    kind = ErrorKind.UNAUTHENTICATED
    status = CallerStatus.UNAUTHENTICATED
    default_message = "The function must be called by an authenticated user."


class InvalidArgument(AnalysisError):
    kind = ErrorKind.INVALID_ARGUMENT
    status = CallerStatus.INVALID_ARGUMENT
    default_message = "No image was provided."


class GatewaySafetyBlock(AnalysisError):
    kind = ErrorKind.GATEWAY_SAFETY_BLOCK
    status = CallerStatus.PERMISSION_DENIED
    default_message = "The image was blocked for safety reasons."


class GatewayFailure(AnalysisError):
    kind = ErrorKind.GATEWAY_FAILURE
    default_message = "Failed to generate the hairstyle simulation."


class MissingResponseText(AnalysisError):
    kind = ErrorKind.MISSING_RESPONSE_TEXT
    default_message = "The model could not process the request (no text)."


class MalformedSuggestionText(AnalysisError):
    kind = ErrorKind.MALFORMED_SUGGESTION_TEXT
    default_message = "The model response did not contain a JSON object."


class InvalidSuggestionJson(AnalysisError):
    kind = ErrorKind.INVALID_SUGGESTION_JSON
    default_message = "The model response contained invalid JSON."


class MissingRecommendationField(AnalysisError):
    kind = ErrorKind.MISSING_RECOMMENDATION_FIELD
    default_message = "The model response did not include a hairstyle suggestion."


class MissingResponseImage(AnalysisError):
    kind = ErrorKind.MISSING_RESPONSE_IMAGE
    default_message = "The model could not process the request (no image)."


class InternalError(AnalysisError):
    """Unexpected failure outside the model call and response handling."""

    kind = ErrorKind.INTERNAL
