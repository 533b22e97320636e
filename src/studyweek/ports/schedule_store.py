"""Generated schedule storage interface."""

from typing import Protocol

from studyweek.core.schedule import GeneratedSchedule


class StoreError(Exception):
    """Raised when a backing store is unreachable or holds malformed data."""

    pass


class ScheduleStore(Protocol):
    """Interface for saving and loading generated schedules, keyed by user."""

    def save(self, schedule: GeneratedSchedule) -> None:
        """Save a schedule, replacing any previous one for the same user."""
        ...

    def load(self, user_id: str) -> GeneratedSchedule | None:
        """Load a user's schedule. Returns None if none was generated."""
        ...
