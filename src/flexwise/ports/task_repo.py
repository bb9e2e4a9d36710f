"""Task repository interface."""

from typing import Protocol

from flexwise.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for loading and storing the To-Do-List from any backend."""

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks."""
        ...

    def save_all(self, tasks: list[Task]) -> None:
        """Replace the stored task list."""
        ...
