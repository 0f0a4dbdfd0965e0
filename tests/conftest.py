"""Shared test fixtures."""

import pytest

from models.analysis_models import GatewayResponse, InlineImagePart, TextPart
from tests.fakes import EDITED_IMAGE, VALID_TEXT, make_response
from utils.settings import Settings


@pytest.fixture
def valid_response() -> GatewayResponse:
    return make_response(TextPart(text=VALID_TEXT), InlineImagePart(data=EDITED_IMAGE, mime_type="image/png"))


@pytest.fixture
def settings() -> Settings:
    return Settings(model_provider="gemini", gemini_api_key="test-key", gateway_timeout_seconds=5.0)
