"""Tests for response parsing and validation."""

import json
from datetime import datetime

import pytest

from clarity_flow.triage.exceptions import AIFailedError, ResponseParseError
from clarity_flow.triage.models import Priority, Quadrant
from clarity_flow.triage.response_parser import extract_json_candidate, parse_response


def make_response(**overrides: object) -> str:
    data: dict[str, object] = {
        "quadrant": "urgent-important",
        "confidence": 0.9,
        "reasoning": "Deadline is tomorrow morning",
        "estimatedTime": 30,
        "tags": ["work"],
        "priority": "high",
    }
    data.update(overrides)
    return json.dumps(data)


@pytest.mark.unit
class TestRejection:
    """Test cases for malformed model output."""

    @pytest.mark.parametrize(
        "raw",
        [
            "not json at all",
            '{"quadrant":"bogus","reasoning":"x"}',
            '{"reasoning":"x"}',
            '{"quadrant":"urgent-important"}',
            '{"quadrant":"urgent-important","reasoning":"   "}',
            '{"quadrant": "urgent-important", "reasoning": ',
            "",
        ],
    )
    def test_malformed_output_raises_parse_error(self, raw: str) -> None:
        """Test that malformed output raises ResponseParseError."""
        with pytest.raises(ResponseParseError):
            parse_response(raw)

    def test_non_object_json_is_rejected(self) -> None:
        """Test that a JSON array is rejected."""
        with pytest.raises(ResponseParseError, match="not a JSON object"):
            parse_response('["urgent-important"]')

    def test_parse_error_is_an_ai_failure(self) -> None:
        """Test that callers can treat parse errors as AI failures."""
        with pytest.raises(AIFailedError) as exc_info:
            parse_response("nope")
        assert exc_info.value.code == "AI_RESPONSE_PARSE_ERROR"

    def test_foo_bar_body_is_rejected(self) -> None:
        """Test that a JSON object without a quadrant is rejected."""
        with pytest.raises(ResponseParseError, match="quadrant"):
            parse_response('{"foo":"bar"}')


@pytest.mark.unit
class TestExtraction:
    """Test cases for JSON extraction from surrounding text."""

    def test_embedded_json_is_extracted(self) -> None:
        """Test parsing JSON surrounded by prose."""
        result = parse_response(
            'Here is the result: {"quadrant":"urgent-important","reasoning":"because"} Thanks!'
        )
        assert result.quadrant == Quadrant.URGENT_IMPORTANT
        assert result.reasoning == "because"

    def test_markdown_fenced_json_is_extracted(self) -> None:
        """Test parsing JSON wrapped in a markdown code fence."""
        raw = "```json\n" + make_response() + "\n```"
        assert parse_response(raw).quadrant == Quadrant.URGENT_IMPORTANT

    def test_candidate_without_braces_is_whole_text(self) -> None:
        """Test that text without braces is returned unchanged."""
        assert extract_json_candidate("plain") == "plain"

    def test_candidate_keeps_nested_objects(self) -> None:
        """Test that nested braces stay inside the candidate."""
        raw = 'x {"a": {"b": 1}} y'
        assert json.loads(extract_json_candidate(raw)) == {"a": {"b": 1}}


@pytest.mark.unit
class TestNormalization:
    """Test cases for field normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(-5, 0.0), (1.4, 1.0), (0.42, 0.42), (0, 0.0), ("high", 0.7), (None, 0.7), (True, 0.7)],
    )
    def test_confidence_is_clamped_or_defaulted(self, value: object, expected: float) -> None:
        """Test confidence clamping and defaulting."""
        result = parse_response(make_response(confidence=value))
        assert result.confidence == pytest.approx(expected)
        assert 0.0 <= result.confidence <= 1.0

    def test_missing_confidence_defaults(self) -> None:
        """Test that absent confidence defaults to 0.7."""
        result = parse_response('{"quadrant":"urgent-important","reasoning":"x"}')
        assert result.confidence == pytest.approx(0.7)

    @pytest.mark.parametrize(("value", "expected"), [(45, 45), ("soon", 60), (None, 60), (0, 60), (12.6, 13)])
    def test_estimated_time_defaults(self, value: object, expected: int) -> None:
        """Test estimated time normalization."""
        assert parse_response(make_response(estimatedTime=value)).estimated_time == expected

    def test_tags_default_to_empty_list(self) -> None:
        """Test that non-list tags become an empty list."""
        assert parse_response(make_response(tags="work")).tags == []

    def test_tags_keep_order_and_drop_non_strings(self) -> None:
        """Test tag order and filtering."""
        result = parse_response(make_response(tags=["b", 3, "a", ""]))
        assert result.tags == ["b", "a"]

    @pytest.mark.parametrize(("value", "expected"), [("low", Priority.LOW), ("HIGH", Priority.HIGH), ("urgent", Priority.MEDIUM), (5, Priority.MEDIUM)])
    def test_priority_is_validated(self, value: object, expected: Priority) -> None:
        """Test priority validation against the closed set."""
        assert parse_response(make_response(priority=value)).priority == expected

    def test_due_date_is_parsed(self) -> None:
        """Test ISO due date parsing."""
        result = parse_response(make_response(suggestedDueDate="2025-03-14"))
        assert result.suggested_due_date == datetime(2025, 3, 14)

    @pytest.mark.parametrize("value", ["next friday", None, "", 20250314])
    def test_unparseable_due_date_is_absent(self, value: object) -> None:
        """Test that unparseable due dates are dropped."""
        assert parse_response(make_response(suggestedDueDate=value)).suggested_due_date is None


@pytest.mark.unit
class TestOversizedNumbers:
    """Test cases for numbers beyond float range or the int digit limit."""

    BASE = '{"quadrant":"urgent-important","reasoning":"x",'

    def test_huge_confidence_is_clamped(self) -> None:
        """Test an integer too large for a float clamps instead of overflowing."""
        result = parse_response(self.BASE + '"confidence":' + "9" * 400 + "}")
        assert result.confidence == 1.0

    def test_huge_negative_confidence_is_clamped(self) -> None:
        """Test a hugely negative integer clamps to zero."""
        result = parse_response(self.BASE + '"confidence":-' + "9" * 400 + "}")
        assert result.confidence == 0.0

    def test_huge_estimated_time_defaults(self) -> None:
        """Test an unrepresentable estimate falls back to the default."""
        result = parse_response(self.BASE + '"estimatedTime":' + "9" * 400 + "}")
        assert result.estimated_time == 60

    def test_integer_past_digit_limit_is_parse_error(self) -> None:
        """Test json's digit-limit ValueError surfaces as ResponseParseError."""
        with pytest.raises(ResponseParseError) as exc_info:
            parse_response(self.BASE + '"estimatedTime":' + "9" * 5000 + "}")
        assert exc_info.value.code == "AI_RESPONSE_PARSE_ERROR"

    @pytest.mark.parametrize("value", [0.4, -0.4, 0.49])
    def test_estimate_rounding_to_zero_defaults(self, value: float) -> None:
        """Test estimates that round to zero minutes fall back to the default."""
        assert parse_response(make_response(estimatedTime=value)).estimated_time == 60
