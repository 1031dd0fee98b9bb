"""Priority derivation from quadrant and due date."""

from datetime import datetime

from .models import Priority, Quadrant


def resolve_priority(
    quadrant: Quadrant,
    confidence: float | None = None,
    due_date: datetime | None = None,
) -> Priority:
    """
    Map a quadrant to a priority.

    Confidence is accepted for interface symmetry but does not affect the
    result; it is advisory metadata only.

    Args:
        quadrant: Eisenhower quadrant
        confidence: Ignored
        due_date: Promotes important-not-urgent tasks to medium when present

    Returns:
        Priority level
    """
    if quadrant == Quadrant.URGENT_IMPORTANT:
        return Priority.HIGH
    if quadrant == Quadrant.NOT_URGENT_IMPORTANT:
        return Priority.MEDIUM if due_date is not None else Priority.LOW
    if quadrant == Quadrant.URGENT_NOT_IMPORTANT:
        return Priority.MEDIUM
    return Priority.LOW
