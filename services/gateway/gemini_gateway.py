"""Gemini image-editing gateway built on the google-genai SDK."""

import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from models.analysis_models import GatewayResponse, ImageInput, InlineImagePart, ResponsePart, TextPart
from services.gateway.base import GatewayError

LOGGER = logging.getLogger(__name__)
DEFAULT_MODEL = "gemini-2.5-flash-image-preview"

HARM_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def build_safety_settings(threshold: str) -> List[types.SafetySetting]:
    """Apply one block threshold to every harm category."""
    block_threshold = types.HarmBlockThreshold(threshold)
    return [types.SafetySetting(category=category, threshold=block_threshold) for category in HARM_CATEGORIES]


def _enum_name(value: Any) -> str:
    return str(getattr(value, "value", value))


class GeminiGateway:
    """Send a face photo plus instructions to Gemini and collect text and image parts."""

    def __init__(self, client: genai.Client, model: str = DEFAULT_MODEL, safety_threshold: str = "BLOCK_NONE") -> None:
        """Initialize the gateway with a shared google-genai client.

        Args:
            client: google-genai Client created once at startup.
            model: Image-capable Gemini model name.
            safety_threshold: HarmBlockThreshold name applied to all four harm categories.
        """
        if client is None:
            raise ValueError("Gemini client must be provided.")
        self.client = client
        self.model = model
        self.safety_settings = build_safety_settings(safety_threshold)

    async def generate(self, image: ImageInput, prompt: str) -> GatewayResponse:
        """Run one generate_content call; prompt-level blocks raise GatewayError."""
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[
                types.Content(
                    role="user",
                    parts=[
                        types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                        types.Part.from_text(text=prompt),
                    ],
                )
            ],
            config=types.GenerateContentConfig(
                safety_settings=self.safety_settings,
                response_modalities=["TEXT", "IMAGE"],
            ),
        )
        LOGGER.debug("Gemini response received: %r", response)

        block_reason = getattr(getattr(response, "prompt_feedback", None), "block_reason", None)
        if block_reason:
            raise GatewayError(f"Request blocked by Gemini: {_enum_name(block_reason)}")

        return GatewayResponse(parts=self._collect_parts(response), prompt_feedback=self._describe_feedback(response))

    async def aclose(self) -> None:
        """Close the async and sync HTTP clients held by the google-genai Client."""
        aclose = getattr(getattr(self.client, "aio", None), "aclose", None)
        if aclose is not None:
            await aclose()
        close = getattr(self.client, "close", None)
        if close is not None:
            close()

    @staticmethod
    def _collect_parts(response: Any) -> List[ResponsePart]:
        """Convert the first candidate's content parts into ResponsePart values."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        content = getattr(candidates[0], "content", None)
        parts: List[ResponsePart] = []
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None:
                parts.append(
                    InlineImagePart(
                        data=getattr(inline_data, "data", None) or b"",
                        mime_type=getattr(inline_data, "mime_type", None) or "image/png",
                    )
                )
            elif getattr(part, "text", None) is not None:
                parts.append(TextPart(text=part.text))
        return parts

    @staticmethod
    def _describe_feedback(response: Any) -> Optional[str]:
        """Summarize prompt feedback and finish reasons for diagnostics."""
        details = []
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None:
            details.append(f"prompt_feedback={feedback}")
        for index, candidate in enumerate(getattr(response, "candidates", None) or []):
            finish_reason = getattr(candidate, "finish_reason", None)
            if finish_reason is not None:
                details.append(f"candidate[{index}].finish_reason={_enum_name(finish_reason)}")
        return "; ".join(details) or None
