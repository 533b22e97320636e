"""Task chunking - pure logic, no I/O."""

import math
from dataclasses import dataclass
from datetime import date

from .tasks import Task


@dataclass
class TaskChunk:
    """A bounded-length piece of a task, scheduled as one session."""

    task_id: str
    title: str
    notes: str | None
    estimated_hours: float
    priority: float
    due_date: date | None
    activity_id: str | None
    chunk_index: int
    total_chunks: int

    @property
    def duration_minutes(self) -> int:
        return math.ceil(self.estimated_hours * 60)

    @property
    def is_split(self) -> bool:
        return self.total_chunks > 1


def create_task_chunks(task: Task, max_session_length: int = 60) -> list[TaskChunk]:
    """
    Split a task's effort into chunks of at most max_session_length minutes.

    Chunks are filled greedily, so only the last one can be shorter.
    Priority is left at 0 for the caller to set after scoring.
    """
    effort = task.effort_hours
    max_chunk_hours = max_session_length / 60
    total = math.ceil(effort / max_chunk_hours)

    chunks = []
    remaining = effort
    for i in range(total):
        hours = min(remaining, max_chunk_hours)
        remaining -= hours
        chunks.append(
            TaskChunk(
                task_id=task.id,
                title=f"{task.title} (Part {i + 1} of {total})" if total > 1 else task.title,
                notes=task.notes,
                estimated_hours=hours,
                priority=0,
                due_date=task.due_date,
                activity_id=task.activity_id,
                chunk_index=i,
                total_chunks=total,
            )
        )

    return chunks
