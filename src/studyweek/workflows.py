"""Shared workflow layer between the CLI and storage.

Each function resolves a store from config, runs the pure engine, and
persists or renders the result.
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .adapters.file_store import FileStore
from .adapters.ics import generate_ics, ics_file_name
from .adapters.rest_api import RestStoreAdapter
from .config import Config
from .core.engine import SchedulingEngine
from .core.priority import PriorityResult
from .core.schedule import GeneratedSchedule
from .ports.schedule_store import StoreError

logger = logging.getLogger(__name__)


def week_start_for(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def get_timezone(config: Config) -> tzinfo | None:
    """Resolve the configured timezone. None means naive local times."""
    if not config.timezone:
        return None
    try:
        return ZoneInfo(config.timezone)
    except ZoneInfoNotFoundError:
        logger.warning(f"Unknown timezone {config.timezone!r}, using local time")
        return None


def get_store(config: Config) -> FileStore | RestStoreAdapter:
    """REST store when an API URL is configured, file store otherwise."""
    if config.api_base_url:
        return RestStoreAdapter(config)
    return FileStore(config.resolved_data_dir())


def get_engine(config: Config) -> SchedulingEngine:
    return SchedulingEngine(config.scheduling(), tz=get_timezone(config))


def generate_schedule(
    config: Config,
    user_id: str,
    week_start: date | None = None,
    now: datetime | None = None,
) -> GeneratedSchedule:
    """Fetch tasks and busy time, generate a schedule, save it, return it."""
    engine = get_engine(config)
    now = now or datetime.now(engine.tz)
    week_start = week_start or week_start_for(now.date())

    store = get_store(config)
    tasks = store.fetch_tasks(user_id)
    busy = store.fetch_busy_periods(user_id)
    logger.info(f"Generating schedule for {user_id}: {len(tasks)} tasks, {len(busy)} time blocks")

    schedule = engine.generate_schedule(user_id, tasks, busy, week_start, now=now)
    store.save(schedule)
    return schedule


def score_tasks(config: Config, user_id: str, now: datetime | None = None) -> list[PriorityResult]:
    """Priority breakdown for a user's incomplete tasks, highest first."""
    engine = get_engine(config)
    now = now or datetime.now(engine.tz)
    tasks = get_store(config).fetch_tasks(user_id)
    return sorted(engine.score_tasks(tasks, now), key=lambda r: -r.priority)


def get_schedule(config: Config, user_id: str) -> GeneratedSchedule:
    """Load the user's saved schedule. Raises StoreError if none exists."""
    schedule = get_store(config).load(user_id)
    if schedule is None:
        raise StoreError(f"No generated schedule found for {user_id}. Run 'studyweek generate' first.")
    return schedule


def export_calendar(
    config: Config,
    user_id: str,
    output_dir: Path,
    now: datetime | None = None,
) -> Path:
    """Write the user's saved schedule as an .ics file and return its path."""
    schedule = get_schedule(config, user_id)
    now = now or datetime.now().astimezone()
    output_dir = Path(output_dir).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / ics_file_name(user_id, now.date())
    path.write_text(generate_ics(schedule.sessions, now))
    logger.info(f"Wrote {len(schedule.sessions)} events to {path}")
    return path
