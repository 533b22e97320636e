"""Functional core - pure scheduling logic with no I/O."""

from .tasks import Task, filter_incomplete
from .busy import BusyPeriod, group_busy_periods, merge_overlapping
from .slots import AvailableSlot, calculate_available_slots, calculate_week_slots
from .priority import PriorityResult, calculate_priority
from .chunking import TaskChunk, create_task_chunks
from .allocation import Allocation, allocate
from .schedule import GeneratedSchedule, ScheduledSession, assemble_schedule
from .engine import SchedulingConfig, SchedulingEngine

__all__ = [
    # Tasks
    "Task",
    "filter_incomplete",
    # Busy time
    "BusyPeriod",
    "group_busy_periods",
    "merge_overlapping",
    # Slots
    "AvailableSlot",
    "calculate_available_slots",
    "calculate_week_slots",
    # Scoring and chunking
    "PriorityResult",
    "calculate_priority",
    "TaskChunk",
    "create_task_chunks",
    # Allocation
    "Allocation",
    "allocate",
    # Schedule
    "GeneratedSchedule",
    "ScheduledSession",
    "assemble_schedule",
    "SchedulingConfig",
    "SchedulingEngine",
]
