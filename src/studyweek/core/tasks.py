"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

UNDATED = "TBD"


def parse_due_date(value: str | date | None) -> date | None:
    """Parse a stored due date: ISO date, ISO timestamp, or the undated marker."""
    if value is None or isinstance(value, date):
        return value
    value = value.strip()
    if not value or value.upper() == UNDATED:
        return None
    return date.fromisoformat(value.split("T")[0])


@dataclass
class Task:
    """A task snapshot read from the task store."""

    id: str
    title: str
    due_date: date | None
    estimated_hours: float | None = None
    completed: bool = False
    notes: str | None = None
    activity_id: str | None = None

    @property
    def effort_hours(self) -> float:
        """Estimated effort, defaulting to one hour when unset."""
        return self.estimated_hours or 1

    @property
    def is_undated(self) -> bool:
        return self.due_date is None

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored todo record."""
        hours = data.get("estimatedHours")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            due_date=parse_due_date(data.get("dueDate")),
            estimated_hours=float(hours) if hours else None,
            completed=bool(data.get("completed", False)),
            notes=data.get("notes") or None,
            activity_id=data.get("activityId") or None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat() if self.due_date else UNDATED,
            "estimatedHours": self.estimated_hours,
            "completed": self.completed,
            "notes": self.notes,
            "activityId": self.activity_id,
        }


def filter_incomplete(tasks: list[Task]) -> list[Task]:
    """Filter to tasks that still need work."""
    return [t for t in tasks if not t.completed]
