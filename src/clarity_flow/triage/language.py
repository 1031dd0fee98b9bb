"""Heuristic language detection for prompt selection.

Detection is keyword scoring, not a trained classifier. Short or mixed-language
inputs ("Meeting urgent besok") can land on either side, and a text with no
known words falls back to the default language. That is expected behavior.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .logging_utils import get_logger
from .models import Language

logger = get_logger(__name__)

# Bump when keyword lists change so stored analyses can be traced to a profile set
KEYWORD_PROFILES_VERSION = 1

DEFAULT_LANGUAGE = Language.ENGLISH
MODAL_MARKER_BONUS = 2


@dataclass(frozen=True)
class KeywordProfile:
    """Keywords and modal markers that signal one language."""

    language: Language
    keywords: tuple[str, ...]
    modal_markers: tuple[str, ...] = ()
    marker_bonus: int = MODAL_MARKER_BONUS
    _patterns: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )
    _marker_patterns: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_patterns", _compile(self.keywords))
        object.__setattr__(self, "_marker_patterns", _compile(self.modal_markers))

    def score(self, text: str) -> int:
        """
        Score lowercased text against this profile.

        Args:
            text: Lowercased input

        Returns:
            Number of matching keywords plus the marker bonus if any marker matches
        """
        score = sum(1 for pattern in self._patterns if pattern.search(text))
        if any(pattern.search(text) for pattern in self._marker_patterns):
            score += self.marker_bonus
        return score


def _compile(words: Sequence[str]) -> tuple[re.Pattern[str], ...]:
    # Whole-word match so "ini" does not fire inside "finish"
    return tuple(re.compile(rf"(?<!\w){re.escape(word)}(?!\w)") for word in words)


INDONESIAN_PROFILE = KeywordProfile(
    language=Language.INDONESIAN,
    keywords=(
        # function words
        "dan", "atau", "dengan", "untuk", "dari", "ke", "di", "pada", "dalam",
        "yang", "ini", "itu",
        # pronouns
        "saya", "aku", "kamu", "dia", "mereka", "kita", "kami",
        # actions
        "buat", "bikin", "lakukan", "kerjakan", "selesaikan", "tugas", "pekerjaan",
        # time units
        "hari", "minggu", "bulan", "tahun", "jam", "menit",
        # urgency
        "penting", "urgent", "mendesak", "segera", "cepat",
        # domain terms
        "rapat", "meeting", "presentasi", "laporan", "proyek",
        # temporal terms
        "besok", "nanti", "sekarang", "hari ini", "kemarin",
    ),
    modal_markers=("harus", "perlu", "mau", "ingin", "akan", "sudah"),
)

ENGLISH_PROFILE = KeywordProfile(
    language=Language.ENGLISH,
    keywords=(
        # function words
        "and", "or", "with", "for", "from", "to", "in", "on", "at", "of", "the",
        "this", "that",
        # pronouns
        "i", "me", "my", "you", "he", "she", "they", "we", "our",
        # actions
        "make", "do", "finish", "complete", "prepare", "send", "call", "task",
        # time units
        "day", "week", "month", "year", "hour", "minute",
        # urgency
        "important", "asap", "critical", "quickly",
        # domain terms
        "meeting", "presentation", "report", "project", "email",
        # temporal terms
        "tomorrow", "later", "now", "today", "yesterday", "tonight",
    ),
    modal_markers=("need", "must", "should", "have to", "want", "will", "going to"),
)

DEFAULT_PROFILES = (INDONESIAN_PROFILE, ENGLISH_PROFILE)


class LanguageDetector:
    """Scores text against keyword profiles and picks the best language."""

    def __init__(
        self,
        profiles: Sequence[KeywordProfile] = DEFAULT_PROFILES,
        default_language: Language = DEFAULT_LANGUAGE,
    ) -> None:
        self._profiles = tuple(profiles)
        self._default_language = default_language

    def scores(self, text: str) -> dict[Language, int]:
        """Score text against every profile."""
        lowered = text.lower()
        return {profile.language: profile.score(lowered) for profile in self._profiles}

    def detect(self, text: str) -> Language:
        """
        Detect the language of a task description.

        Args:
            text: Raw task text

        Returns:
            Highest scoring language; ties and all-zero scores return the default
        """
        scores = self.scores(text)
        best = max(scores.values(), default=0)
        if best == 0:
            return self._default_language

        leaders = [language for language, score in scores.items() if score == best]
        if len(leaders) > 1:
            return self._default_language

        logger.debug(f"Language scores: {scores}")
        return leaders[0]
