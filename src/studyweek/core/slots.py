"""Free time calculation - pure logic, no I/O."""

from dataclasses import dataclass

from .busy import DAYS_PER_WEEK, MINUTES_PER_DAY, BusyPeriod, merge_overlapping


@dataclass(frozen=True)
class AvailableSlot:
    """A free interval on one day, in minutes since midnight."""

    day: int
    start: int
    end: int
    duration: int

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.day, self.start, self.end)

    def format(self) -> str:
        return (
            f"{self.start // 60:02d}:{self.start % 60:02d}-"
            f"{self.end // 60:02d}:{self.end % 60:02d} ({self.duration} min)"
        )


def calculate_available_slots(
    day_periods: list[BusyPeriod],
    day: int,
    buffer_time: int = 5,
    min_session_length: int = 5,
) -> list[AvailableSlot]:
    """
    Find free slots between one day's busy periods.

    Pure function - no I/O.

    Args:
        day_periods: Busy periods for a single day, sorted by start
        day: Day index (0 = Monday)
        buffer_time: Minutes kept clear around each busy period
        min_session_length: Minimum slot duration in minutes

    Returns:
        List of AvailableSlots ordered by start
    """
    slots = []
    current_time = 0

    for period in day_periods:
        # Gap before this period, buffered on both sides
        available = period.start - current_time - buffer_time * 2
        if available >= min_session_length:
            slots.append(
                AvailableSlot(
                    day=day,
                    start=current_time + buffer_time,
                    end=period.start - buffer_time,
                    duration=available,
                )
            )
        current_time = period.end

    # Gap after last period only subtracts a single buffer from its duration
    available = MINUTES_PER_DAY - current_time - buffer_time
    if available >= min_session_length:
        slots.append(
            AvailableSlot(
                day=day,
                start=current_time + buffer_time,
                end=MINUTES_PER_DAY - buffer_time,
                duration=available,
            )
        )

    return slots


def calculate_week_slots(
    days: list[list[BusyPeriod]],
    buffer_time: int = 5,
    min_session_length: int = 5,
    merge_overlaps: bool = False,
) -> list[list[AvailableSlot]]:
    """Calculate available slots for all seven days of a grouped week."""
    week = []
    for day in range(DAYS_PER_WEEK):
        periods = days[day] if day < len(days) else []
        if merge_overlaps:
            periods = merge_overlapping(periods)
        week.append(calculate_available_slots(periods, day, buffer_time, min_session_length))
    return week
