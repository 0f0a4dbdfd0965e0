"""Controller for face analysis requests."""

import logging
from typing import Any, Dict

from fastapi import Request

from models.analysis_models import ImageInput, InboundRequest
from services.analysis.errors import InvalidArgument, Unauthenticated
from services.analysis.pipeline import AnalysisPipeline
from utils.caller_identity import resolve_caller_identity
from utils.media_validation import decode_base64_image

LOGGER = logging.getLogger(__name__)


async def analyze_face(request: Request, image_base64: Any) -> Dict[str, Any]:
    """Validate the inbound call and run the analysis pipeline.

    Args:
        request: FastAPI Request (used to access app.state settings and pipeline).
        image_base64: Base64 JPEG sent by the client; may be missing or of the wrong type.

    Returns:
        The success payload with `suggestionText` and `editedImageBase64`.

    Raises:
        Unauthenticated: If no caller identity reached the service.
        InvalidArgument: If the image is missing, not a string, or not valid base64.
        AnalysisError: Any classified pipeline failure.
    """
    settings = request.app.state.settings
    pipeline: AnalysisPipeline = request.app.state.analysis_pipeline

    uid = resolve_caller_identity(request, settings.identity_header)
    if uid is None:
        LOGGER.warning("Rejected unauthenticated analysis request.")
        raise Unauthenticated()

    try:
        image_bytes, mime_type = decode_base64_image(image_base64)
    except ValueError as exc:
        LOGGER.warning("[%s] Rejected image payload: %s", uid, exc)
        raise InvalidArgument(caller_identity=uid) from exc

    inbound = InboundRequest(caller_identity=uid, image=ImageInput(data=image_bytes, mime_type=mime_type))
    result = await pipeline.run(inbound)
    return result.to_payload()
