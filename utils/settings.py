"""Process configuration, read once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

SUPPORTED_PROVIDERS = ("gemini", "openai")


@dataclass(frozen=True)
class Settings:
    """Explicit configuration passed to the gateway and pipeline.

    Attributes:
        model_provider: Which gateway to build, "gemini" or "openai".
        gemini_api_key: API key for the google-genai client.
        gemini_model: Image-capable Gemini model name.
        openai_api_key: API key for the OpenAI client.
        openai_model: Responses API model name.
        safety_threshold: Block threshold applied to every harm category.
        gateway_timeout_seconds: Bound on the model call; 0 disables it.
        identity_header: Header carrying the authenticated caller id.
        log_level: Root logger level.
    """

    model_provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash-image-preview"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-5"
    safety_threshold: str = "BLOCK_NONE"
    gateway_timeout_seconds: float = 120.0
    identity_header: str = "X-Authenticated-User"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If the provider is unknown or the timeout is not a number.
        """
        env = os.environ if environ is None else environ
        provider = env.get("MODEL_PROVIDER", cls.model_provider).strip().lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported MODEL_PROVIDER '{provider}'. Supported: {', '.join(SUPPORTED_PROVIDERS)}")

        timeout_raw = env.get("GATEWAY_TIMEOUT_SECONDS")
        try:
            timeout = float(timeout_raw) if timeout_raw else cls.gateway_timeout_seconds
        except ValueError as exc:
            raise ValueError(f"GATEWAY_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'") from exc

        return cls(
            model_provider=provider,
            gemini_api_key=env.get("GEMINI_API_KEY") or None,
            gemini_model=env.get("GEMINI_MODEL") or cls.gemini_model,
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_model=env.get("OPENAI_MODEL") or cls.openai_model,
            safety_threshold=(env.get("SAFETY_THRESHOLD") or cls.safety_threshold).upper(),
            gateway_timeout_seconds=max(timeout, 0.0),
            identity_header=env.get("IDENTITY_HEADER") or cls.identity_header,
            log_level=(env.get("LOG_LEVEL") or cls.log_level).upper(),
        )
