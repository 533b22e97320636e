"""Schedule assembly - pure logic, no I/O."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo

from .chunking import TaskChunk
from .slots import AvailableSlot

SCHEDULE_VERSION = 1


@dataclass
class ScheduledSession:
    """A study session placed at an absolute time."""

    id: str
    task_id: str
    title: str
    start_time: datetime
    end_time: datetime
    day_of_week: int
    calculated_priority: float
    notes: str | None = None
    chunk_index: int | None = None
    activity_id: str | None = None
    location: str | None = None

    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() / 60)

    def format_time(self) -> str:
        return f"{self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "title": self.title,
            "notes": self.notes,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "dayOfWeek": self.day_of_week,
            "chunkIndex": self.chunk_index,
            "calculatedPriority": self.calculated_priority,
            "activityId": self.activity_id,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledSession":
        return cls(
            id=data["id"],
            task_id=data["taskId"],
            title=data["title"],
            start_time=datetime.fromisoformat(data["startTime"]),
            end_time=datetime.fromisoformat(data["endTime"]),
            day_of_week=int(data["dayOfWeek"]),
            calculated_priority=float(data.get("calculatedPriority", 0)),
            notes=data.get("notes"),
            chunk_index=data.get("chunkIndex"),
            activity_id=data.get("activityId"),
            location=data.get("location"),
        )


@dataclass
class GeneratedSchedule:
    """All sessions produced by one generation run for a user."""

    user_id: str
    week_start_date: date
    generated_at: datetime
    sessions: list[ScheduledSession] = field(default_factory=list)
    version: int = SCHEDULE_VERSION

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "weekStartDate": self.week_start_date.isoformat(),
            "sessions": [s.to_dict() for s in self.sessions],
            "generatedAt": self.generated_at.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratedSchedule":
        return cls(
            user_id=data["userId"],
            week_start_date=date.fromisoformat(data["weekStartDate"][:10]),
            generated_at=datetime.fromisoformat(data["generatedAt"]),
            sessions=[ScheduledSession.from_dict(s) for s in data.get("sessions", [])],
            version=int(data.get("version", SCHEDULE_VERSION)),
        )


def new_session_id(chunk: TaskChunk) -> str:
    return f"session-{chunk.task_id}-{chunk.chunk_index}-{uuid.uuid4().hex[:12]}"


def create_session(
    chunk: TaskChunk,
    slot: AvailableSlot,
    week_start: date,
    tz: tzinfo | None = None,
) -> ScheduledSession:
    """Place a chunk at the start of its slot, on the slot's day of the given week."""
    day_start = datetime.combine(week_start + timedelta(days=slot.day), time(), tzinfo=tz)
    start = day_start + timedelta(minutes=slot.start)
    end = start + timedelta(minutes=chunk.duration_minutes)

    return ScheduledSession(
        id=new_session_id(chunk),
        task_id=chunk.task_id,
        title=chunk.title,
        notes=chunk.notes,
        start_time=start,
        end_time=end,
        day_of_week=slot.day,
        chunk_index=chunk.chunk_index + 1 if chunk.is_split else None,
        calculated_priority=chunk.priority,
        activity_id=chunk.activity_id,
    )


def assemble_schedule(
    user_id: str,
    placed: list[tuple[TaskChunk, AvailableSlot]],
    week_start: date,
    generated_at: datetime,
    tz: tzinfo | None = None,
) -> GeneratedSchedule:
    """
    Wrap allocated chunks into a versioned schedule envelope.

    Pure function - no I/O.
    """
    return GeneratedSchedule(
        user_id=user_id,
        week_start_date=week_start,
        generated_at=generated_at,
        sessions=[create_session(chunk, slot, week_start, tz) for chunk, slot in placed],
    )


def sessions_by_day(schedule: GeneratedSchedule) -> dict[int, list[ScheduledSession]]:
    """Group sessions by day of week, each day sorted by start time."""
    days: dict[int, list[ScheduledSession]] = {}
    for session in sorted(schedule.sessions, key=lambda s: s.start_time):
        days.setdefault(session.day_of_week, []).append(session)
    return days
