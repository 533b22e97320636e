"""Busy period grouping - pure logic, no I/O."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
MINUTES_PER_DAY = 1440
BUSY = "busy"


@dataclass(frozen=True)
class BusyPeriod:
    """A fixed weekly commitment, in minutes since midnight."""

    day: int
    start: int
    end: int
    type: str = BUSY
    label: str = ""

    @property
    def is_busy(self) -> bool:
        return self.type == BUSY

    def format(self) -> str:
        return f"{self.start // 60:02d}:{self.start % 60:02d}-{self.end // 60:02d}:{self.end % 60:02d}"

    @classmethod
    def from_dict(cls, data: dict) -> "BusyPeriod":
        """Create BusyPeriod from a stored time block record."""
        return cls(
            day=int(data["day"]),
            start=int(data["startTime"]),
            end=int(data["endTime"]),
            type=data.get("type", BUSY),
            label=data.get("title") or data.get("label") or "",
        )


def group_busy_periods(periods: list[BusyPeriod]) -> list[list[BusyPeriod]]:
    """
    Group busy periods into seven per-day lists, Monday first.

    Only "busy" periods are kept. Each day is sorted by start minute.
    Overlapping periods are passed through unchanged.
    Pure function - no I/O.
    """
    days: list[list[BusyPeriod]] = [[] for _ in range(DAYS_PER_WEEK)]

    for period in periods:
        if not period.is_busy:
            continue
        if not 0 <= period.day < DAYS_PER_WEEK:
            logger.debug(f"Skipping busy period with invalid day {period.day}")
            continue
        days[period.day].append(period)

    return [sorted(day, key=lambda p: p.start) for day in days]


def merge_overlapping(day_periods: list[BusyPeriod]) -> list[BusyPeriod]:
    """
    Coalesce overlapping or touching busy periods of one day.

    Expects periods sorted by start. Merged periods keep the first label.
    """
    merged: list[BusyPeriod] = []
    for period in day_periods:
        if merged and period.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = BusyPeriod(
                day=last.day,
                start=last.start,
                end=max(last.end, period.end),
                type=last.type,
                label=last.label,
            )
        else:
            merged.append(period)
    return merged


def find_overlaps(day_periods: list[BusyPeriod]) -> list[tuple[BusyPeriod, BusyPeriod]]:
    """
    Find overlapping busy periods within one sorted day.

    Returns list of (earlier, later) tuples that conflict.
    """
    conflicts = []
    for i, first in enumerate(day_periods):
        for second in day_periods[i + 1 :]:
            # sorted by start - nothing later can overlap either
            if second.start >= first.end:
                break
            conflicts.append((first, second))
    return conflicts
