"""Callable-style route for face analysis."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from controllers.analysis_controller import analyze_face
from services.analysis.errors import AnalysisError, InternalError

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def error_response(exc: AnalysisError) -> JSONResponse:
    """Render a classified error with its caller-visible status."""
    return JSONResponse(status_code=exc.status.http_status, content=exc.to_payload())


async def read_image_field(request: Request) -> Any:
    """Return `data.image` from a `{"data": {"image": ...}}` body, or None.

    The body is read loosely so shape problems reach the controller, which
    checks the caller identity before rejecting the image.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    data = body.get("data") if isinstance(body, dict) else None
    return data.get("image") if isinstance(data, dict) else None


@router.post("/analyzeFace")
async def post_analyze_face(request: Request):
    """Analyze a face photo and return a hairstyle suggestion plus the edited image."""
    try:
        image_base64 = await read_image_field(request)
        result = await analyze_face(request, image_base64)
    except AnalysisError as exc:
        return error_response(exc)
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.exception("Unexpected error while analyzing face.")
        return error_response(InternalError())
    return {"result": result}
