"""Run one face analysis: gateway call, extraction, parsing, and assembly.

Checks run in a fixed order and the first failing one decides the error:
gateway call, response text, suggestion parse, response image. Failures are
logged with the caller id and the raw context, then raised as an
`AnalysisError` carrying a generic message.
"""

import asyncio
import base64
import logging
import time
from typing import Optional

from models.analysis_models import AnalysisResult, GatewayResponse, InboundRequest
from services.analysis.errors import (
    GatewayFailure,
    GatewaySafetyBlock,
    MissingResponseImage,
    MissingResponseText,
)
from services.analysis.response_extractor import extract_parts
from services.analysis.suggestion_parser import parse_suggestion
from services.gateway.base import ModelGateway, is_safety_block
from services.gateway.prompts import build_prompt

LOGGER = logging.getLogger(__name__)
NO_FEEDBACK = "No prompt feedback."


class AnalysisPipeline:
    """Stateless orchestrator; one instance can serve concurrent requests."""

    def __init__(self, gateway: ModelGateway, *, timeout_seconds: Optional[float] = None) -> None:
        """Initialize the pipeline with a model gateway.

        Args:
            gateway: Gateway used for the single model call.
            timeout_seconds: Upper bound for the gateway call; None or 0 disables it.
        """
        if gateway is None:
            raise ValueError("A model gateway must be provided.")
        self.gateway = gateway
        self.timeout_seconds = timeout_seconds or None
        self.prompt = build_prompt()

    async def run(self, request: InboundRequest) -> AnalysisResult:
        uid = request.caller_identity
        start_time = time.time()

        response = await self._call_gateway(request)

        raw_text, image = extract_parts(response.parts)
        if not raw_text:
            LOGGER.error("[%s] Model returned no text. Feedback: %s", uid, response.prompt_feedback or NO_FEEDBACK)
            raise MissingResponseText(caller_identity=uid)

        suggestion = parse_suggestion(raw_text, uid)

        if image is None:
            LOGGER.error("[%s] Model returned no image. Feedback: %s", uid, response.prompt_feedback or NO_FEEDBACK)
            raise MissingResponseImage(caller_identity=uid)

        LOGGER.info("[%s] Analysis completed in %.3fs.", uid, time.time() - start_time)
        return AnalysisResult(
            suggestion_text=suggestion.recommendation_text,
            edited_image_base64=base64.b64encode(image.data).decode("ascii"),
        )

    async def _call_gateway(self, request: InboundRequest) -> GatewayResponse:
        """Call the gateway once and classify any failure."""
        uid = request.caller_identity
        LOGGER.info("[%s] Starting model analysis (single call)...", uid)
        try:
            return await asyncio.wait_for(
                self.gateway.generate(request.image, self.prompt), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            LOGGER.error("[%s] Model call timed out after %ss.", uid, self.timeout_seconds)
            raise GatewayFailure(caller_identity=uid) from exc
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("[%s] Error calling the model gateway: %s", uid, exc)
            if is_safety_block(exc):
                raise GatewaySafetyBlock(caller_identity=uid) from exc
            raise GatewayFailure(caller_identity=uid) from exc
