"""Productivity insights over a task collection."""

from collections.abc import Sequence

from .config import (
    COMPLETION_RATE_THRESHOLD,
    CONSERVATIVE_ESTIMATE_THRESHOLD,
    OPTIMISTIC_ESTIMATE_THRESHOLD,
    SCHEDULED_IMPORTANT_RATIO_THRESHOLD,
    URGENT_IMPORTANT_RATIO_THRESHOLD,
)
from .models import ProductivityInsights, Quadrant, Task, TaskStatistics


def compute_task_statistics(tasks: Sequence[Task]) -> TaskStatistics:
    """
    Compute quadrant distribution, completion and estimate accuracy.

    Args:
        tasks: Tasks to analyze

    Returns:
        TaskStatistics; ratios are 0.0 for an empty collection and
        time_accuracy is None unless both actual and estimated totals are positive
    """
    counts = {quadrant: 0 for quadrant in Quadrant}
    for task in tasks:
        counts[Quadrant(task.quadrant)] += 1

    total = len(tasks)
    if total == 0:
        return TaskStatistics(
            total=0,
            quadrant_counts=counts,
            completion_rate=0.0,
            urgent_important_ratio=0.0,
            scheduled_important_ratio=0.0,
        )

    completed = sum(1 for task in tasks if task.completed)
    total_estimated = sum(task.estimated_time or 0 for task in tasks)
    total_actual = sum(task.actual_time or 0 for task in tasks)

    time_accuracy = None
    if total_estimated > 0 and total_actual > 0:
        time_accuracy = total_actual / total_estimated

    return TaskStatistics(
        total=total,
        quadrant_counts=counts,
        completion_rate=completed / total,
        urgent_important_ratio=counts[Quadrant.URGENT_IMPORTANT] / total,
        scheduled_important_ratio=counts[Quadrant.NOT_URGENT_IMPORTANT] / total,
        time_accuracy=time_accuracy,
    )


def get_productivity_insights(tasks: Sequence[Task]) -> ProductivityInsights:
    """
    Turn task statistics into insight and recommendation strings.

    Args:
        tasks: Tasks to analyze

    Returns:
        ProductivityInsights with parallel insight/recommendation lists
    """
    result = ProductivityInsights()

    if not tasks:
        result.insights.append(
            "Welcome to ClarityFlow! Start by adding your first task."
        )
        result.recommendations.append(
            'Try adding a task with keywords like "urgent", "important", or '
            '"meeting" to see AI analysis in action.'
        )
        return result

    stats = compute_task_statistics(tasks)

    if stats.urgent_important_ratio > URGENT_IMPORTANT_RATIO_THRESHOLD:
        result.insights.append(
            "You have many urgent and important tasks. Consider better planning "
            "to reduce last-minute urgency."
        )
        result.recommendations.append(
            "Try to schedule more tasks in advance to avoid the urgent-important quadrant."
        )

    if stats.scheduled_important_ratio < SCHEDULED_IMPORTANT_RATIO_THRESHOLD:
        result.insights.append(
            "You have few scheduled important tasks. This might lead to future urgency."
        )
        result.recommendations.append(
            "Focus on planning and scheduling important tasks that aren't urgent yet."
        )

    if stats.completion_rate < COMPLETION_RATE_THRESHOLD:
        result.insights.append("Your task completion rate is below optimal levels.")
        result.recommendations.append(
            "Consider breaking down large tasks into smaller, more manageable pieces."
        )

    if stats.time_accuracy is not None:
        if stats.time_accuracy > OPTIMISTIC_ESTIMATE_THRESHOLD:
            result.insights.append(
                "Your time estimates tend to be optimistic. Tasks take longer than expected."
            )
            result.recommendations.append(
                "Add buffer time to your estimates to account for unexpected delays."
            )
        elif stats.time_accuracy < CONSERVATIVE_ESTIMATE_THRESHOLD:
            result.insights.append(
                "Your time estimates are conservative. You're completing tasks "
                "faster than expected."
            )
            result.recommendations.append(
                "Consider adjusting your time estimates to be more realistic."
            )

    return result
