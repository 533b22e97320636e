"""Busy time repository interface."""

from typing import Protocol

from studyweek.core.busy import BusyPeriod


class BusyTimeRepository(Protocol):
    """Interface for fetching a user's weekly busy periods."""

    def fetch_busy_periods(self, user_id: str) -> list[BusyPeriod]:
        """Fetch the user's weekly time blocks."""
        ...
