"""Urgency scoring - pure logic, no I/O."""

import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from .tasks import Task

UNDATED_PRIORITY = 0.1
OVERDUE_MULTIPLIER = 100
IMPOSSIBLE_MULTIPLIER = 50
MAX_HOURS_PER_DAY = 8

# (effort below, days at most, multiplier) - first match wins
URGENCY_TIERS = [
    (3, 1, 10),
    (6, 2, 8),
    (12, 3, 6),
    (18, 4, 4),
    (math.inf, 5, 2),
]


@dataclass(frozen=True)
class PriorityResult:
    """Priority score for a task, with the terms it was computed from."""

    task_id: str
    priority: float
    urgency_multiplier: int
    base_priority: float
    days_until_due: float
    average_hours_per_day: float


def days_until_due(task: Task, now: datetime) -> float:
    """Whole days (rounded up) from now until the start of the due date."""
    if task.is_undated:
        return math.inf
    due = datetime.combine(task.due_date, time(), tzinfo=now.tzinfo)
    return math.ceil((due - now) / timedelta(days=1))


def urgency_multiplier(effort_hours: float, days: float) -> int:
    """Deadline-driven multiplier, including the overdue and impossible overrides."""
    if days <= 0:
        return OVERDUE_MULTIPLIER

    multiplier = 1
    for max_effort, max_days, tier_multiplier in URGENCY_TIERS:
        if effort_hours < max_effort and days <= max_days:
            multiplier = tier_multiplier
            break

    if effort_hours > days * MAX_HOURS_PER_DAY:
        multiplier = IMPOSSIBLE_MULTIPLIER

    return multiplier


def calculate_priority(task: Task, now: datetime) -> PriorityResult:
    """
    Score a task by required daily pace and deadline urgency.

    Undated tasks get a fixed low score. Pure function - the clock is passed in.
    """
    if task.is_undated:
        return PriorityResult(
            task_id=task.id,
            priority=UNDATED_PRIORITY,
            urgency_multiplier=1,
            base_priority=UNDATED_PRIORITY,
            days_until_due=math.inf,
            average_hours_per_day=0,
        )

    days = days_until_due(task, now)
    effort = task.effort_hours
    average = effort / max(days, 1)
    multiplier = urgency_multiplier(effort, days)

    return PriorityResult(
        task_id=task.id,
        priority=average * multiplier,
        urgency_multiplier=multiplier,
        base_priority=average,
        days_until_due=days,
        average_hours_per_day=average,
    )
