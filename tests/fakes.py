"""Gateway doubles and canned model responses."""

from typing import Any, List, Optional

from models.analysis_models import GatewayResponse, ImageInput

EDITED_IMAGE = b"\x89PNG\r\n\x1a\nedited"
VALID_TEXT = (
    'Here you go: {"analisis":{"genero":"Hombre","forma_rostro":"Diamante"},'
    '"sugerencia_corte":"Corte bajo texturizado"} thanks'
)


class FakeGateway:
    """Gateway double that records calls and returns a canned response or raises."""

    def __init__(self, response: Optional[GatewayResponse] = None, error: Optional[BaseException] = None) -> None:
        self.response = response or GatewayResponse()
        self.error = error
        self.calls: List[Any] = []
        self.closed = False

    async def generate(self, image: ImageInput, prompt: str) -> GatewayResponse:
        self.calls.append((image, prompt))
        if self.error is not None:
            raise self.error
        return self.response

    async def aclose(self) -> None:
        self.closed = True


def make_response(*parts: Any, feedback: Optional[str] = None) -> GatewayResponse:
    return GatewayResponse(parts=list(parts), prompt_feedback=feedback)
