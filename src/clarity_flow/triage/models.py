"""Data models for task triage functionality."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Quadrant(str, Enum):
    """Eisenhower Matrix quadrant enumeration."""

    URGENT_IMPORTANT = "urgent-important"  # Do first
    NOT_URGENT_IMPORTANT = "not-urgent-important"  # Schedule
    URGENT_NOT_IMPORTANT = "urgent-not-important"  # Delegate
    NOT_URGENT_NOT_IMPORTANT = "not-urgent-not-important"  # Eliminate


class Priority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Language(str, Enum):
    """Prompt language enumeration."""

    ENGLISH = "en"
    INDONESIAN = "id"


class GateReason(str, Enum):
    """Reason automated analysis was refused."""

    OFFLINE = "OFFLINE"
    FEATURE_DISABLED = "FEATURE_DISABLED"
    NO_CREDENTIAL = "NO_CREDENTIAL"


class TriageState(str, Enum):
    """Stages of a single analyze() call."""

    IDLE = "idle"
    CHECKING_GATE = "checking_gate"
    SELECTING_PROVIDER = "selecting_provider"
    BUILDING_PROMPT = "building_prompt"
    CALLING_PROVIDER = "calling_provider"
    PARSING = "parsing"
    DONE = "done"
    MANUAL = "manual"


@dataclass
class AnalysisResult:
    """Result of task triage, produced by both the automated and manual paths."""

    quadrant: Quadrant
    confidence: float
    reasoning: str
    priority: Priority
    estimated_time: int
    tags: list[str] = field(default_factory=list)
    suggested_due_date: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ParsedResponse:
    """Validated and normalized model output."""

    quadrant: Quadrant
    confidence: float
    reasoning: str
    estimated_time: int
    priority: Priority
    tags: list[str] = field(default_factory=list)
    suggested_due_date: datetime | None = None


@dataclass
class ProviderCredential:
    """Persisted API key record for one provider."""

    provider_id: str
    api_key: str = ""
    enabled: bool = False
    description: str = ""
    last_updated: datetime | None = None


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the connectivity/feature gate."""

    allowed: bool
    reason: GateReason | None = None


@dataclass
class Task:
    """Task fields read by the insight aggregator."""

    title: str
    quadrant: Quadrant
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    estimated_time: int | None = None
    actual_time: int | None = None
    due_date: datetime | None = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_analysis(cls, title: str, result: AnalysisResult) -> "Task":
        """Build a task from a triage result so the host can persist it."""
        return cls(
            title=title,
            quadrant=result.quadrant,
            priority=result.priority,
            estimated_time=result.estimated_time,
            due_date=result.suggested_due_date,
            tags=list(result.tags),
        )


@dataclass
class TaskStatistics:
    """Descriptive statistics over a task collection."""

    total: int
    quadrant_counts: dict[Quadrant, int]
    completion_rate: float
    urgent_important_ratio: float
    scheduled_important_ratio: float
    time_accuracy: float | None = None


@dataclass
class ProductivityInsights:
    """Qualitative insights and recommendations."""

    insights: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
