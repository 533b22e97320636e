"""Scheduling engine - runs the full allocation pipeline. Pure, no I/O."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from .allocation import allocate
from .busy import BusyPeriod, group_busy_periods
from .chunking import TaskChunk, create_task_chunks
from .priority import PriorityResult, calculate_priority
from .schedule import GeneratedSchedule, assemble_schedule
from .slots import calculate_week_slots
from .tasks import Task, filter_incomplete

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulingConfig:
    """Scheduling algorithm settings. All lengths are in minutes."""

    max_session_length: int = 60
    min_session_length: int = 5
    buffer_time: int = 5
    max_study_hours_per_week: float | None = None
    merge_overlaps: bool = False

    def __post_init__(self):
        if self.max_session_length <= 0:
            raise ValueError(f"max_session_length must be positive, got {self.max_session_length}")

    @property
    def max_study_minutes(self) -> int | None:
        if self.max_study_hours_per_week is None:
            return None
        return int(self.max_study_hours_per_week * 60)


DEFAULT_CONFIG = SchedulingConfig()


class SchedulingEngine:
    """
    Turns tasks and busy periods into a week of study sessions.

    Holds only its configuration, so one instance can serve any number of
    calls. The clock is passed per call.
    """

    def __init__(self, config: SchedulingConfig = DEFAULT_CONFIG, tz: tzinfo | None = None):
        self.config = config
        self.tz = tz

    def score_tasks(self, tasks: list[Task], now: datetime) -> list[PriorityResult]:
        """Priority results for each incomplete task, in input order."""
        return [calculate_priority(t, now) for t in filter_incomplete(tasks)]

    def build_chunks(self, tasks: list[Task], now: datetime) -> list[TaskChunk]:
        """Chunk every task and stamp each chunk with its task's priority."""
        chunks = []
        for task in tasks:
            result = calculate_priority(task, now)
            for chunk in create_task_chunks(task, self.config.max_session_length):
                chunk.priority = result.priority
                chunks.append(chunk)
        return chunks

    def generate_schedule(
        self,
        user_id: str,
        tasks: list[Task],
        busy_periods: list[BusyPeriod],
        week_start: date,
        now: datetime | None = None,
    ) -> GeneratedSchedule:
        """
        Generate a schedule for one user's week.

        Args:
            user_id: Owner of the schedule
            tasks: Task snapshot; completed tasks are ignored
            busy_periods: Weekly busy periods; non-busy types are ignored
            week_start: Date of the Monday the week starts on
            now: Current time used for scoring and the generation timestamp

        Returns:
            GeneratedSchedule, possibly with no sessions
        """
        now = now or datetime.now(self.tz)
        if isinstance(week_start, datetime):
            week_start = week_start.date()

        incomplete = filter_incomplete(tasks)
        if not incomplete:
            logger.info(f"No incomplete tasks for {user_id}, returning empty schedule")
            return assemble_schedule(user_id, [], week_start, now, self.tz)

        days = group_busy_periods(busy_periods)
        slots_by_day = calculate_week_slots(
            days,
            buffer_time=self.config.buffer_time,
            min_session_length=self.config.min_session_length,
            merge_overlaps=self.config.merge_overlaps,
        )
        slot_count = sum(len(day) for day in slots_by_day)

        chunks = self.build_chunks(incomplete, now)
        logger.debug(f"{len(incomplete)} tasks -> {len(chunks)} chunks, {slot_count} free slots")

        allocation = allocate(chunks, slots_by_day, self.config.max_study_minutes)
        logger.debug(f"Placed {allocation.placed_minutes} minutes in {len(allocation.placed)} sessions")
        if allocation.dropped:
            logger.info(f"Dropped {len(allocation.dropped)} of {len(chunks)} chunks for {user_id}")

        return assemble_schedule(user_id, allocation.placed, week_start, now, self.tz)
