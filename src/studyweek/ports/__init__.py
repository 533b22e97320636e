"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .busy_time_repo import BusyTimeRepository
from .schedule_store import ScheduleStore, StoreError

__all__ = [
    "TaskRepository",
    "BusyTimeRepository",
    "ScheduleStore",
    "StoreError",
]
