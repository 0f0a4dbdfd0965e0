"""Image-editing gateway on OpenAI's Responses API with the image_generation tool."""

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, BadRequestError

from models.analysis_models import GatewayResponse, ImageInput, InlineImagePart, ResponsePart, TextPart
from services.gateway.base import SAFETY_MARKER, GatewayError

LOGGER = logging.getLogger(__name__)
DEFAULT_MODEL = "gpt-5"
MODERATION_CODE = "moderation_blocked"


def to_image_data_url(image: ImageInput) -> str:
    """Encode image bytes as a data URL suitable for vision input."""
    encoded = base64.b64encode(image.data).decode("utf-8")
    return f"data:{image.mime_type};base64,{encoded}"


def build_inputs(image: ImageInput, prompt: str) -> List[Dict[str, Any]]:
    """Build the Responses API input array: instruction text, then the photo."""
    return [
        {
            "type": "message",
            "role": "user",
            "content": [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": to_image_data_url(image)},
            ],
        }
    ]


class OpenAIGateway:
    """Send a face photo plus instructions to an OpenAI model that can edit images."""

    def __init__(self, client: AsyncOpenAI, model: str = DEFAULT_MODEL) -> None:
        if client is None:
            raise ValueError("OpenAI client must be provided.")
        self.client = client
        self.model = model

    async def generate(self, image: ImageInput, prompt: str) -> GatewayResponse:
        """Run one Responses API call; moderation rejections carry the safety marker."""
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=build_inputs(image, prompt),
                tools=[{"type": "image_generation"}],
            )
        except BadRequestError as exc:
            if getattr(exc, "code", None) == MODERATION_CODE:
                raise GatewayError(f"Request blocked for {SAFETY_MARKER} reasons: {exc}") from exc
            raise
        LOGGER.debug("OpenAI response received: %r", response)

        return GatewayResponse(parts=self._collect_parts(response), prompt_feedback=self._describe_feedback(response))

    async def aclose(self) -> None:
        """Close the shared AsyncOpenAI client."""
        await self.client.close()

    @staticmethod
    def _collect_parts(response: Any) -> List[ResponsePart]:
        """Convert message text and image_generation_call results into ResponsePart values."""
        parts: List[ResponsePart] = []
        for item in getattr(response, "output", None) or []:
            item_type = getattr(item, "type", None)
            if item_type == "message":
                for content in getattr(item, "content", None) or []:
                    if getattr(content, "type", None) == "output_text":
                        parts.append(TextPart(text=getattr(content, "text", "") or ""))
            elif item_type == "image_generation_call":
                parts.append(InlineImagePart(data=_decode_result(getattr(item, "result", None))))
        return parts

    @staticmethod
    def _describe_feedback(response: Any) -> Optional[str]:
        """Summarize response status and incomplete details for diagnostics."""
        details = []
        status = getattr(response, "status", None)
        if status:
            details.append(f"status={status}")
        incomplete = getattr(response, "incomplete_details", None)
        if incomplete is not None:
            details.append(f"incomplete_details={incomplete}")
        return "; ".join(details) or None


def _decode_result(result: Optional[str]) -> bytes:
    if not result:
        return b""
    try:
        return base64.b64decode(result)
    except (binascii.Error, ValueError):
        LOGGER.error("image_generation_call returned a result that is not base64.")
        return b""
