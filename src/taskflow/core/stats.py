"""Aggregate completion statistics."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from taskflow.models import Task
from taskflow.utils.clock import is_same_local_day, local_now


@dataclass(frozen=True)
class TaskStats:
    """Statistics shown in the overview cards."""

    completed_today: int
    """Completed tasks whose completion timestamp falls on today."""

    total_tasks: int
    """Number of tasks, ignoring any filter."""

    completion_rate: int
    """Today's completions as a rounded percentage of all tasks."""


def completion_rate(completed_today: int, total_tasks: int) -> int:
    """Percentage of all tasks completed today, rounded half up; 0 when empty."""
    if total_tasks <= 0:
        return 0
    # round half up
    return int(completed_today * 100 / total_tasks + 0.5)


def compute_stats(tasks: Sequence[Task], now: datetime | None = None) -> TaskStats:
    """Compute statistics over the full, unfiltered task set.

    Args:
        tasks: All tasks
        now: Current time (local now if omitted)
    """
    now = now or local_now()
    completed_today = sum(
        1
        for task in tasks
        if task.completed and task.completed_at and is_same_local_day(task.completed_at, now)
    )
    total = len(tasks)
    return TaskStats(
        completed_today=completed_today,
        total_tasks=total,
        completion_rate=completion_rate(completed_today, total),
    )
