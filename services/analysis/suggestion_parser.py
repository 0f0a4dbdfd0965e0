"""Parse the hairstyle suggestion out of the model's free text.

The model is asked to answer with a bare JSON object but routinely wraps it
in prose or code fences, so the object is cut out of the text before it is
decoded.
"""

import json
import logging
from typing import Any, Optional

from models.analysis_models import ParsedSuggestion
from services.analysis.errors import (
    InvalidSuggestionJson,
    MalformedSuggestionText,
    MissingRecommendationField,
)

LOGGER = logging.getLogger(__name__)

RECOMMENDATION_KEY = "sugerencia_corte"
ANALYSIS_KEY = "analisis"


def extract_json_block(raw_text: str) -> Optional[str]:
    """Return the span from the first '{' to the last '}' inclusive, trimmed.

    This is a substring heuristic, not a parser: an unmatched '}' in trailing
    prose widens the span and the decode step then rejects it.
    Returns None when either delimiter is missing or they are out of order.
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return raw_text[start : end + 1].strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_suggestion(raw_text: str, correlation_id: str) -> ParsedSuggestion:
    """Extract and validate the recommendation from the model's text.

    Args:
        raw_text: Trimmed text part returned by the model.
        correlation_id: Caller identity, used only to tag log lines.

    Returns:
        ParsedSuggestion with the recommendation and the diagnostic analysis block.

    Raises:
        MalformedSuggestionText: The text has no '{' ... '}' span.
        InvalidSuggestionJson: The span is not a valid JSON object.
        MissingRecommendationField: The object has no usable recommendation.
    """
    json_block = extract_json_block(raw_text)
    if json_block is None:
        LOGGER.error("[%s] Parse error: text contains no '{' or '}': %r", correlation_id, raw_text)
        raise MalformedSuggestionText(caller_identity=correlation_id)

    try:
        payload = json.loads(json_block, parse_constant=_reject_constant)
    except ValueError as exc:
        LOGGER.error("[%s] Parse error: invalid JSON (%s): %r", correlation_id, exc, json_block)
        raise InvalidSuggestionJson(caller_identity=correlation_id) from exc

    if not isinstance(payload, dict):
        LOGGER.error("[%s] Parse error: JSON is not an object: %r", correlation_id, json_block)
        raise InvalidSuggestionJson(caller_identity=correlation_id)

    recommendation = payload.get(RECOMMENDATION_KEY)
    if not isinstance(recommendation, str) or not recommendation.strip():
        LOGGER.error(
            "[%s] Parse error: JSON has no usable '%s': %r", correlation_id, RECOMMENDATION_KEY, payload
        )
        raise MissingRecommendationField(caller_identity=correlation_id)

    analysis = payload.get(ANALYSIS_KEY)
    LOGGER.info("[%s] Model analysis: %s", correlation_id, analysis)
    return ParsedSuggestion(
        recommendation_text=recommendation.strip(),
        analysis=analysis if isinstance(analysis, dict) else None,
    )
