import logging

import pytest

from services.analysis.errors import (
    CallerStatus,
    ErrorKind,
    InvalidSuggestionJson,
    MalformedSuggestionText,
    MissingRecommendationField,
)
from services.analysis.suggestion_parser import extract_json_block, parse_suggestion


def test_extracts_suggestion_wrapped_in_prose() -> None:
    raw = 'Here you go: {"analisis":{"genero":"Hombre"},"sugerencia_corte":"Corte bajo texturizado"} thanks'

    parsed = parse_suggestion(raw, "user-1")

    assert parsed.recommendation_text == "Corte bajo texturizado"
    assert parsed.analysis == {"genero": "Hombre"}


def test_extracts_suggestion_from_code_fence() -> None:
    raw = '```json\n{"sugerencia_corte": "Fade medio con volumen arriba"}\n```'

    assert parse_suggestion(raw, "user-1").recommendation_text == "Fade medio con volumen arriba"


def test_parsing_is_idempotent() -> None:
    raw = '{"analisis": {}, "sugerencia_corte": "Bob clásico"}'

    assert parse_suggestion(raw, "u") == parse_suggestion(raw, "u")


@pytest.mark.parametrize("raw", ["no braces here", "only { opening", "only } closing", "} reversed {"])
def test_missing_delimiters_is_malformed(raw: str) -> None:
    with pytest.raises(MalformedSuggestionText) as exc_info:
        parse_suggestion(raw, "user-1")

    assert exc_info.value.kind is ErrorKind.MALFORMED_SUGGESTION_TEXT
    assert exc_info.value.status is CallerStatus.INTERNAL
    assert exc_info.value.caller_identity == "user-1"


@pytest.mark.parametrize(
    "raw",
    [
        '{"sugerencia_corte": "Corte "bajo""}',
        '{"sugerencia_corte": "Corte bajo",}',
        '{"analisis": {"genero": "Hombre"}',
        'Intro {"sugerencia_corte": "x"} and a stray } later',
        '{"sugerencia_corte": "x", "score": NaN}',
    ],
)
def test_invalid_json_between_braces(raw: str) -> None:
    with pytest.raises(InvalidSuggestionJson):
        parse_suggestion(raw, "user-1")


def test_recommendation_key_missing() -> None:
    with pytest.raises(MissingRecommendationField):
        parse_suggestion('{"analisis":{}}', "user-1")


@pytest.mark.parametrize("value", ['""', '"   "', "null", "42", '["corte"]'])
def test_recommendation_must_be_non_empty_string(value: str) -> None:
    with pytest.raises(MissingRecommendationField):
        parse_suggestion('{"sugerencia_corte": %s}' % value, "user-1")


def test_raw_text_is_logged_not_exposed(caplog: pytest.LogCaptureFixture) -> None:
    raw = "the model rambled without any json"

    with caplog.at_level(logging.ERROR):
        with pytest.raises(MalformedSuggestionText) as exc_info:
            parse_suggestion(raw, "user-42")

    assert raw not in exc_info.value.message
    assert "[user-42]" in caplog.text
    assert raw in caplog.text


def test_extract_json_block_spans_first_open_to_last_close() -> None:
    assert extract_json_block('a { "x": {"y": 1} } b') == '{ "x": {"y": 1} }'
    assert extract_json_block("nothing") is None
