"""Build the configured model gateway and its SDK client."""

from google import genai
from openai import AsyncOpenAI

from services.gateway.base import ModelGateway
from services.gateway.gemini_gateway import GeminiGateway
from services.gateway.openai_gateway import OpenAIGateway
from utils.settings import Settings


def build_gateway(settings: Settings) -> ModelGateway:
    """Create the gateway for `settings.model_provider`.

    Raises:
        RuntimeError: If the selected provider has no API key or the client cannot be created.
    """
    if settings.model_provider == "openai":
        if not settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY environment variable is not set")
        try:
            client = AsyncOpenAI(api_key=settings.openai_api_key)
        except Exception as exc:
            raise RuntimeError("Failed to initialize OpenAI Async client") from exc
        return OpenAIGateway(client, model=settings.openai_model)

    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY environment variable is not set")
    try:
        client = genai.Client(api_key=settings.gemini_api_key)
    except Exception as exc:
        raise RuntimeError("Failed to initialize Gemini client") from exc
    return GeminiGateway(client, model=settings.gemini_model, safety_threshold=settings.safety_threshold)
