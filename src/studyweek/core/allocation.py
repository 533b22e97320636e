"""Greedy slot allocation - pure logic, no I/O."""

import logging
from dataclasses import dataclass, field

from .chunking import TaskChunk
from .slots import AvailableSlot

logger = logging.getLogger(__name__)


@dataclass
class Allocation:
    """Result of one allocation sweep."""

    placed: list[tuple[TaskChunk, AvailableSlot]] = field(default_factory=list)
    dropped: list[TaskChunk] = field(default_factory=list)

    @property
    def placed_minutes(self) -> int:
        return sum(chunk.duration_minutes for chunk, _ in self.placed)


def sort_chunks(chunks: list[TaskChunk]) -> list[TaskChunk]:
    """Sort chunks by priority, highest first. Ties keep insertion order."""
    return sorted(chunks, key=lambda c: -c.priority)


def find_best_slot(
    slots_by_day: list[list[AvailableSlot]],
    duration_minutes: int,
    claimed: set[tuple[int, int, int]],
) -> AvailableSlot | None:
    """
    Pick the earliest unclaimed slot long enough for a chunk.

    Preference: earlier day, then earlier start, then longer duration.
    """
    candidates = [
        slot
        for day_slots in slots_by_day
        for slot in day_slots
        if slot.key not in claimed and slot.duration >= duration_minutes
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda s: (s.day, s.start, -s.duration))


def allocate(
    chunks: list[TaskChunk],
    slots_by_day: list[list[AvailableSlot]],
    max_minutes: int | None = None,
) -> Allocation:
    """
    Assign each chunk, in priority order, to the best still-free slot.

    A slot is consumed whole by the first chunk placed in it. Chunks with
    no fitting slot (or that would exceed max_minutes) are dropped.
    Pure function - no I/O.
    """
    result = Allocation()
    claimed: set[tuple[int, int, int]] = set()
    used_minutes = 0

    for chunk in sort_chunks(chunks):
        needed = chunk.duration_minutes

        if max_minutes is not None and used_minutes + needed > max_minutes:
            logger.debug(f"Weekly cap reached, dropping {chunk.title!r}")
            result.dropped.append(chunk)
            continue

        slot = find_best_slot(slots_by_day, needed, claimed)
        if slot is None:
            logger.debug(f"No {needed} min slot left for {chunk.title!r}")
            result.dropped.append(chunk)
            continue

        claimed.add(slot.key)
        used_minutes += needed
        result.placed.append((chunk, slot))

    return result
