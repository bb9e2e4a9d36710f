"""File-based task storage adapter."""

import json
import logging
from pathlib import Path

from flexwise.core.tasks import Task

logger = logging.getLogger(__name__)


class DataFileError(Exception):
    """Raised when the task data file cannot be read or parsed."""

    pass


class JsonTaskStore:
    """
    JSON file task storage.

    Implements TaskRepository protocol. The file holds a list of task objects
    in the front-end shape (camelCase keys). A missing file is an empty list.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks. Entries that cannot be parsed are skipped."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataFileError(f"Cannot read task file {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("tasks", [])
        if not isinstance(data, list):
            raise DataFileError(f"Task file {self.path} must contain a list of tasks")

        tasks = []
        for item in data:
            try:
                tasks.append(Task.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed task entry {item!r}: {e}")
        return tasks

    def save_all(self, tasks: list[Task]) -> None:
        """Replace the stored task list."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False)
        self.path.write_text(payload + "\n", encoding="utf-8")
        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
