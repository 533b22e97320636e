"""File-based JSON store adapter."""

import json
import logging
from pathlib import Path

from studyweek.core.busy import BusyPeriod
from studyweek.core.schedule import GeneratedSchedule
from studyweek.core.tasks import Task
from studyweek.ports.schedule_store import StoreError

logger = logging.getLogger(__name__)


class FileStore:
    """
    File-based storage for todos, time blocks and generated schedules.

    Implements TaskRepository, BusyTimeRepository and ScheduleStore protocols.
    Each user gets one JSON file per collection.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str, user_id: str) -> Path:
        """Get the file path for a user's document in a collection."""
        return self.data_dir / collection / f"{user_id}.json"

    def _read(self, collection: str, user_id: str) -> dict | list | None:
        path = self._path(collection, user_id)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise StoreError(f"Malformed {collection} document for {user_id}: {e}") from e

    def _write(self, collection: str, user_id: str, data: dict | list) -> None:
        path = self._path(collection, user_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))

    def fetch_tasks(self, user_id: str) -> list[Task]:
        """Fetch all todos for a user. Missing file means no tasks."""
        data = self._read("todos", user_id) or []
        try:
            return [Task.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed todo record for {user_id}: {e}") from e

    def fetch_busy_periods(self, user_id: str) -> list[BusyPeriod]:
        """Fetch a user's weekly time blocks. Missing file means a free week."""
        data = self._read("schedules", user_id) or {}
        try:
            return parse_time_blocks(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed time block for {user_id}: {e}") from e

    def save_tasks(self, user_id: str, tasks: list[Task]) -> None:
        self._write("todos", user_id, [t.to_dict() for t in tasks])

    def save(self, schedule: GeneratedSchedule) -> None:
        """Write/overwrite the user's generated schedule."""
        self._write("generated", schedule.user_id, schedule.to_dict())
        logger.debug(f"Saved {len(schedule.sessions)} sessions for {schedule.user_id}")

    def load(self, user_id: str) -> GeneratedSchedule | None:
        """Read the user's generated schedule. Returns None if not found."""
        data = self._read("generated", user_id)
        if data is None:
            return None
        try:
            return GeneratedSchedule.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed generated schedule for {user_id}: {e}") from e


def parse_time_blocks(data: dict | list) -> list[BusyPeriod]:
    """
    Parse a stored schedule document into busy periods.

    Accepts {"timeBlocks": {id: block}}, {"timeBlocks": [block]} or a bare list.
    """
    blocks = data.get("timeBlocks", {}) if isinstance(data, dict) else data
    if isinstance(blocks, dict):
        blocks = list(blocks.values())
    return [BusyPeriod.from_dict(b) for b in blocks]
