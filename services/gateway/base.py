"""Common contract for multimodal model gateways."""

from typing import Protocol

from models.analysis_models import GatewayResponse, ImageInput

SAFETY_MARKER = "SAFETY"


class GatewayError(RuntimeError):
    """Raised by a gateway when the model call itself fails.

    Safety blocks are signalled textually: their message contains `SAFETY_MARKER`.
    """


class ModelGateway(Protocol):
    """Single-shot image + instruction call returning ordered content parts."""

    async def generate(self, image: ImageInput, prompt: str) -> GatewayResponse:
        ...

    async def aclose(self) -> None:
        ...


def is_safety_block(exc: BaseException) -> bool:
    """Return True when a gateway failure message reports a safety block."""
    return SAFETY_MARKER in str(exc)
