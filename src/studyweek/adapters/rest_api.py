"""REST store adapter - HTTP client for the scheduling backend."""

import logging

import requests

from studyweek.config import Config, load_config
from studyweek.core.busy import BusyPeriod
from studyweek.core.schedule import GeneratedSchedule
from studyweek.core.tasks import Task
from studyweek.ports.schedule_store import StoreError

from .file_store import parse_time_blocks

logger = logging.getLogger(__name__)


class RestStoreAdapter:
    """
    Backend API adapter.

    Implements TaskRepository, BusyTimeRepository and ScheduleStore protocols.
    Handles auth headers and API calls. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, timeout: int = 30):
        self.config = config or load_config()
        if not self.config.api_base_url:
            raise StoreError("No API base URL. Set API_BASE_URL in studyweek.conf.")
        self.base_url = self.config.api_base_url
        self.timeout = timeout
        self._session = requests.Session()
        if self.config.api_token:
            self._session.headers["Authorization"] = f"Bearer {self.config.api_token}"

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Make an API request, wrapping transport errors."""
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StoreError(f"Request to {url} failed: {e}") from e
        logger.debug(f"{method} {url} -> {resp.status_code}")
        return resp

    def _json(self, resp: requests.Response) -> dict | list:
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise StoreError(f"API error {resp.status_code}: {resp.text}") from e
        try:
            return resp.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON from {resp.url}: {e}") from e

    def fetch_tasks(self, user_id: str) -> list[Task]:
        """Fetch all todos for a user."""
        data = self._json(self._request("GET", "/todos", params={"userId": user_id}))
        if isinstance(data, dict):
            data = data.get("todos", [])
        try:
            return [Task.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed todo record: {e}") from e

    def fetch_busy_periods(self, user_id: str) -> list[BusyPeriod]:
        """Fetch the user's weekly time blocks. 404 means no schedule yet."""
        resp = self._request("GET", f"/schedules/{user_id}")
        if resp.status_code == 404:
            return []
        try:
            return parse_time_blocks(self._json(resp))
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed time block: {e}") from e

    def save(self, schedule: GeneratedSchedule) -> None:
        """Store the generated schedule under the user's id."""
        resp = self._request(
            "PUT",
            f"/generatedSchedules/{schedule.user_id}",
            json=schedule.to_dict(),
        )
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise StoreError(f"Saving schedule failed: {resp.status_code} {resp.text}") from e

    def load(self, user_id: str) -> GeneratedSchedule | None:
        """Fetch the user's generated schedule, or None if there is none."""
        resp = self._request("GET", f"/generatedSchedules/{user_id}")
        if resp.status_code == 404:
            return None
        data = self._json(resp)
        if isinstance(data, dict) and "schedule" in data:
            data = data["schedule"]
        try:
            return GeneratedSchedule.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed generated schedule: {e}") from e
