"""Task triage engine classifying tasks into Eisenhower Matrix quadrants."""

from .models import (
    AnalysisResult,
    GateDecision,
    Language,
    Priority,
    ProductivityInsights,
    ProviderCredential,
    Quadrant,
    Task,
)
from .triage_service import TriageEngine, open_triage_engine

__all__ = [
    "AnalysisResult",
    "GateDecision",
    "Language",
    "Priority",
    "ProductivityInsights",
    "ProviderCredential",
    "Quadrant",
    "Task",
    "TriageEngine",
    "open_triage_engine",
]
