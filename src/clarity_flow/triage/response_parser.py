"""Parsing and validation of model output into a normalized response."""

import json
import math
import re
from datetime import datetime
from typing import Any

from .config import DEFAULT_CONFIDENCE, DEFAULT_ESTIMATED_TIME
from .exceptions import ResponseParseError
from .logging_utils import get_logger
from .models import ParsedResponse, Priority, Quadrant

logger = get_logger(__name__)

# First "{" through last "}" so nested objects stay intact
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_candidate(raw_text: str) -> str:
    """
    Find the JSON object span inside free-form model output.

    Args:
        raw_text: Raw model output

    Returns:
        The "{...}" span, or the whole text when no braces are present
    """
    match = _JSON_OBJECT.search(raw_text)
    return match.group(0) if match else raw_text


def _as_number(value: Any) -> float | None:
    """Finite float for JSON numbers; integers too large for a float become +/-inf."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
    if math.isnan(number):
        return None
    return number


def _normalize_confidence(value: Any) -> float:
    number = _as_number(value)
    if number is None:
        return DEFAULT_CONFIDENCE
    return min(max(number, 0.0), 1.0)


def _normalize_estimated_time(value: Any) -> int:
    number = _as_number(value)
    if number is None or math.isinf(number):
        return DEFAULT_ESTIMATED_TIME
    minutes = int(round(number))
    if minutes <= 0:
        return DEFAULT_ESTIMATED_TIME
    return minutes


def _normalize_due_date(value: Any) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as e:
        logger.warning(f"Invalid suggested due date '{value}': {e}")
        return None


def _normalize_tags(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]


def _normalize_priority(value: Any) -> Priority:
    if isinstance(value, str):
        try:
            return Priority(value.strip().lower())
        except ValueError:
            pass
    logger.debug(f"Invalid priority '{value}', defaulting to medium")
    return Priority.MEDIUM


def parse_response(raw_text: str) -> ParsedResponse:
    """
    Parse model output into a ParsedResponse.

    There is no fallback classification: anything that cannot be validated
    raises, and the caller decides whether to offer the manual path.

    Args:
        raw_text: Raw text returned by a provider

    Returns:
        Validated and normalized ParsedResponse

    Raises:
        ResponseParseError: If no valid JSON object with a known quadrant and
            a reasoning can be extracted
    """
    candidate = extract_json_candidate(raw_text or "")

    # ValueError also covers integers past the int-to-str digit limit
    try:
        data = json.loads(candidate)
    except ValueError as e:
        logger.error(f"Error parsing AI response: {e}")
        logger.trace(f"Raw response: {raw_text}")
        raise ResponseParseError(f"Invalid JSON in AI response: {e}") from e

    if not isinstance(data, dict):
        raise ResponseParseError("AI response is not a JSON object")

    quadrant_value = data.get("quadrant")
    reasoning = data.get("reasoning")
    if not quadrant_value:
        raise ResponseParseError("Missing required field: quadrant")
    if not isinstance(reasoning, str) or not reasoning.strip():
        raise ResponseParseError("Missing required field: reasoning")

    try:
        quadrant = Quadrant(quadrant_value)
    except ValueError as e:
        raise ResponseParseError(
            f"Invalid quadrant in AI response: {quadrant_value!r}"
        ) from e

    return ParsedResponse(
        quadrant=quadrant,
        confidence=_normalize_confidence(data.get("confidence")),
        reasoning=reasoning.strip(),
        estimated_time=_normalize_estimated_time(data.get("estimatedTime")),
        priority=_normalize_priority(data.get("priority")),
        tags=_normalize_tags(data.get("tags")),
        suggested_due_date=_normalize_due_date(data.get("suggestedDueDate")),
    )
