"""Task repository interface."""

from typing import Protocol

from studyweek.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for fetching a user's tasks from any backend."""

    def fetch_tasks(self, user_id: str) -> list[Task]:
        """Fetch all tasks for a user, completed ones included."""
        ...
