"""Tests for keyword-based language detection."""

import pytest

from clarity_flow.triage.language import (
    DEFAULT_LANGUAGE,
    KeywordProfile,
    LanguageDetector,
)
from clarity_flow.triage.models import Language


@pytest.fixture
def detector() -> LanguageDetector:
    return LanguageDetector()


@pytest.mark.unit
class TestLanguageDetection:
    """Test cases for LanguageDetector.detect."""

    def test_indonesian_sentence(self, detector: LanguageDetector) -> None:
        """Test Indonesian text is detected."""
        assert detector.detect("Saya harus menyelesaikan laporan ini hari ini") == Language.INDONESIAN

    def test_english_sentence(self, detector: LanguageDetector) -> None:
        """Test English text is detected."""
        assert detector.detect("I need to finish this report today") == Language.ENGLISH

    def test_mixed_meeting_text_is_indonesian(self, detector: LanguageDetector) -> None:
        """Test a mixed sentence with Indonesian grammar words."""
        assert detector.detect("Meeting urgent dengan client besok pagi") == Language.INDONESIAN

    def test_detection_is_deterministic(self, detector: LanguageDetector) -> None:
        """Test repeated calls give identical answers."""
        texts = ["Saya harus menyelesaikan laporan ini hari ini", "I need to finish this report today"]
        first = [detector.detect(t) for t in texts]
        for _ in range(5):
            assert [detector.detect(t) for t in texts] == first

    @pytest.mark.parametrize("text", ["", "xyz qwerty", "12345"])
    def test_no_matches_fall_back_to_default(self, detector: LanguageDetector, text: str) -> None:
        """Test all-zero scores resolve to the default language."""
        assert detector.detect(text) == DEFAULT_LANGUAGE

    def test_tie_falls_back_to_default(self, detector: LanguageDetector) -> None:
        """Test a tie resolves to the default language."""
        # "meeting" is a keyword in both profiles
        assert detector.scores("meeting")[Language.INDONESIAN] == detector.scores("meeting")[Language.ENGLISH]
        assert detector.detect("meeting") == DEFAULT_LANGUAGE

    def test_keywords_match_whole_words_only(self, detector: LanguageDetector) -> None:
        """Test that 'ini' inside 'finish' does not count."""
        assert detector.scores("finish")[Language.INDONESIAN] == 0

    def test_modal_marker_adds_bonus(self) -> None:
        """Test modal markers add the fixed bonus once."""
        profile = KeywordProfile(
            language=Language.INDONESIAN,
            keywords=("laporan",),
            modal_markers=("harus", "perlu"),
        )
        assert profile.score("laporan") == 1
        assert profile.score("harus perlu laporan") == 3

    def test_custom_default_language(self) -> None:
        """Test the default language is configurable."""
        detector = LanguageDetector(default_language=Language.INDONESIAN)
        assert detector.detect("zzz") == Language.INDONESIAN
