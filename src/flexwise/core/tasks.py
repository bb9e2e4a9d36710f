"""Pure To-Do-List task logic - no I/O dependencies.

Malformed or missing due dates are stored as ``None``. A task without a valid
due date never falls into a date bucket (other than ``ALL``) and always sorts
after dated tasks. Unknown priority or bucket selectors mean "all"; an unknown
task priority is treated as ``LOW``.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from enum import Enum

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    """Raised when a task action refers to an id that is not in the list."""

    def __init__(self, task_id: int):
        super().__init__(f"No task with id {task_id}")
        self.task_id = task_id


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: "str | Priority | None") -> "Priority":
        """Parse a task priority; unknown values fall back to LOW."""
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unknown task priority {value!r}, using 'low'")
            return cls.LOW


PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.URGENT: 3,
}

# Selector sentinel: no priority restriction.
PRIORITY_ALL = None


def priority_rank(value: "str | Priority | None") -> int:
    """Rank for sorting (urgent=3 ... low=0). Unknown values rank 0."""
    if isinstance(value, Priority):
        return value.rank
    try:
        return Priority(str(value).strip().lower()).rank
    except ValueError:
        return 0


def parse_priority_selector(value: str | None) -> Priority | None:
    """Parse a priority filter value. "all", empty and unknown mean no filter."""
    if not value:
        return PRIORITY_ALL
    try:
        return Priority(value.strip().lower())
    except ValueError:
        return PRIORITY_ALL


class DueDateBucket(Enum):
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    OVERDUE = "overdue"
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | DueDateBucket | None") -> "DueDateBucket":
        """Parse a bucket selector; unknown values mean ALL."""
        if isinstance(value, DueDateBucket):
            return value
        if not value:
            return cls.ALL
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError:
            return cls.ALL


class TaskFlag(Enum):
    HOT_LIST = "hot_list"
    COMPLETED = "completed"


class TaskSort(Enum):
    PRIORITY = "priority"
    DUE_DATE = "due"
    NONE = "none"


def parse_due_date(value: "str | date | None") -> date | None:
    """
    Parse a due date. Accepts ISO dates and ISO datetimes (date part is used).

    Anything else yields None, the invalid-date sentinel.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text.split("T")[0])
    except ValueError:
        logger.debug(f"Invalid due date {value!r}")
        return None


FLAG_STRINGS = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False, "": False}


def _text_field(data: dict, key: str, required: bool = False) -> str:
    """A string field. Missing or null is "" unless required; other types are rejected."""
    value = data.get(key)
    if value is None:
        if required:
            raise ValueError(f"{key!r} is required")
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string, got {value!r}")
    return value


def _flag_field(data: dict, key: str) -> bool:
    """A boolean field. Accepts real booleans, 0/1 and the usual string spellings."""
    value = data.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in FLAG_STRINGS:
        return FLAG_STRINGS[value.strip().lower()]
    logger.warning(f"Invalid boolean for {key!r}: {value!r}, using False")
    return False


@dataclass(frozen=True)
class TaskComment:
    """A comment on a task. Comments are only ever appended."""

    id: int
    author: str
    content: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: dict) -> "TaskComment":
        return cls(
            id=int(data["id"]),
            author=data.get("author", ""),
            # Older mock data stores the body under "text"
            content=data.get("content", data.get("text", "")),
            timestamp=data.get("timestamp", ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "author": self.author,
            "content": self.content,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Task:
    """A To-Do-List task."""

    id: int
    title: str
    description: str = ""
    priority: Priority = Priority.LOW
    due_date: date | None = None
    completed: bool = False
    hot_list: bool = False
    assigned_to: tuple[str, ...] = ()
    created_by: str = ""
    created_at: str = ""
    completed_by: str | None = None
    completed_at: str | None = None
    completion_comment: str | None = None
    comments: tuple[TaskComment, ...] = field(default_factory=tuple)

    @property
    def priority_rank(self) -> int:
        return self.priority.rank

    def days_until_due(self, as_of: date) -> int | None:
        """Days until due date (negative if overdue)."""
        if not self.due_date:
            return None
        return (self.due_date - as_of).days

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from the front-end JSON shape (camelCase keys)."""
        return cls(
            id=int(data["id"]),
            title=_text_field(data, "title", required=True),
            description=_text_field(data, "description"),
            priority=Priority.parse(data.get("priority", "low")),
            due_date=parse_due_date(data.get("dueDate")),
            completed=_flag_field(data, "completed"),
            hot_list=_flag_field(data, "hotList"),
            assigned_to=tuple(data.get("assignedTo") or ()),
            created_by=data.get("createdBy") or data.get("assignedBy") or "",
            created_at=data.get("createdAt") or data.get("assignedAt") or "",
            completed_by=data.get("completedBy"),
            completed_at=data.get("completedAt"),
            completion_comment=data.get("completionComment"),
            comments=tuple(TaskComment.from_dict(c) for c in data.get("comments") or ()),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "completed": self.completed,
            "hotList": self.hot_list,
            "assignedTo": list(self.assigned_to),
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "completedBy": self.completed_by,
            "completedAt": self.completed_at,
            "completionComment": self.completion_comment,
            "comments": [c.to_dict() for c in self.comments],
        }


@dataclass(frozen=True)
class TaskFilters:
    """Filter criteria for the task list."""

    search: str = ""
    priority: Priority | None = PRIORITY_ALL
    due: DueDateBucket = DueDateBucket.ALL
    hot_list_only: bool = False
    show_completed: bool = True


def _as_day(as_of: date | datetime) -> date:
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


def filter_by_search(tasks: list[Task] | None, query: str | None) -> list[Task]:
    """
    Case-insensitive substring match on title or description.

    Pure function - no I/O.
    """
    if not tasks:
        return []
    if not query or not query.strip():
        return list(tasks)
    needle = query.lower()
    return [t for t in tasks if needle in t.title.lower() or needle in t.description.lower()]


def filter_by_priority(tasks: list[Task] | None, priority: "Priority | str | None") -> list[Task]:
    """Exact priority match. PRIORITY_ALL (None) or "all" keeps everything."""
    if not tasks:
        return []
    if not isinstance(priority, Priority):
        priority = parse_priority_selector(priority)
    if priority is PRIORITY_ALL:
        return list(tasks)
    return [t for t in tasks if t.priority is priority]


def in_due_date_bucket(task: Task, bucket: DueDateBucket, as_of: date | datetime) -> bool:
    """Check whether a task falls into a due-date bucket relative to as_of."""
    if bucket is DueDateBucket.ALL:
        return True
    if task.due_date is None:
        return False

    today = _as_day(as_of)
    match bucket:
        case DueDateBucket.TODAY:
            return task.due_date == today
        case DueDateBucket.TOMORROW:
            return task.due_date == today + timedelta(days=1)
        case DueDateBucket.THIS_WEEK:
            # Inclusive on both ends: today through today + 7 days
            return today <= task.due_date <= today + timedelta(days=7)
        case DueDateBucket.OVERDUE:
            return task.due_date < today and not task.completed
    return True


def filter_by_due_date_bucket(
    tasks: list[Task] | None,
    bucket: "DueDateBucket | str",
    as_of: date | datetime,
) -> list[Task]:
    """
    Filter tasks to a due-date bucket computed from the caller's as_of.

    Pure function - no I/O, no clock.
    """
    if not tasks:
        return []
    bucket = DueDateBucket.parse(bucket)
    if bucket is DueDateBucket.ALL:
        return list(tasks)
    return [t for t in tasks if in_due_date_bucket(t, bucket, as_of)]


def filter_by_flag(tasks: list[Task] | None, flag: TaskFlag, enabled: bool) -> list[Task]:
    """
    Generic boolean-field filter.

    HOT_LIST enabled keeps only hot-list tasks. COMPLETED disabled ("show
    completed" off) drops completed tasks. Other combinations keep everything.
    """
    if not tasks:
        return []
    if flag is TaskFlag.HOT_LIST and enabled:
        return [t for t in tasks if t.hot_list]
    if flag is TaskFlag.COMPLETED and not enabled:
        return [t for t in tasks if not t.completed]
    return list(tasks)


def filter_hot_list(tasks: list[Task] | None, only: bool) -> list[Task]:
    return filter_by_flag(tasks, TaskFlag.HOT_LIST, only)


def filter_completed(tasks: list[Task] | None, show: bool) -> list[Task]:
    return filter_by_flag(tasks, TaskFlag.COMPLETED, show)


def sort_by_priority(tasks: list[Task] | None) -> list[Task]:
    """Sort by priority, most urgent first. Stable."""
    if not tasks:
        return []
    return sorted(tasks, key=lambda t: -t.priority_rank)


def sort_by_due_date(tasks: list[Task] | None) -> list[Task]:
    """Sort by due date ascending, tasks without a valid date last. Stable."""
    if not tasks:
        return []
    return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or date.min))


def apply_filters(
    tasks: list[Task] | None,
    filters: TaskFilters,
    as_of: date | datetime,
) -> list[Task]:
    """
    Apply every active filter. A task survives only if it passes all of them.

    Pure function - no I/O.
    """
    result = filter_by_search(tasks, filters.search)
    result = filter_by_priority(result, filters.priority)
    result = filter_by_due_date_bucket(result, filters.due, as_of)
    result = filter_hot_list(result, filters.hot_list_only)
    return filter_completed(result, filters.show_completed)


def build_task_view(
    tasks: list[Task] | None,
    filters: TaskFilters,
    as_of: date | datetime,
    sort: TaskSort = TaskSort.PRIORITY,
) -> list[Task]:
    """Filter then sort - the display-ready task list."""
    filtered = apply_filters(tasks, filters, as_of)
    match sort:
        case TaskSort.PRIORITY:
            return sort_by_priority(filtered)
        case TaskSort.DUE_DATE:
            return sort_by_due_date(filtered)
    return filtered


# Task actions - each returns a new list and leaves the input untouched.


def _index_of(tasks: list[Task], task_id: int) -> int:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    raise TaskNotFoundError(task_id)


def _replace_at(tasks: list[Task], index: int, task: Task) -> list[Task]:
    return [*tasks[:index], task, *tasks[index + 1 :]]


def next_task_id(tasks: list[Task]) -> int:
    return max((t.id for t in tasks), default=0) + 1


def add_task(
    tasks: list[Task],
    title: str,
    created_by: str,
    created_at: str,
    description: str = "",
    priority: Priority | str = Priority.LOW,
    due_date: date | str | None = None,
    hot_list: bool = False,
    assigned_to: tuple[str, ...] = (),
) -> list[Task]:
    """Append a new open task with the next free id."""
    if not title.strip():
        raise ValueError("title must not be empty")
    task = Task(
        id=next_task_id(tasks),
        title=title.strip(),
        description=description,
        priority=Priority.parse(priority),
        due_date=parse_due_date(due_date),
        hot_list=hot_list,
        assigned_to=tuple(assigned_to),
        created_by=created_by,
        created_at=created_at,
    )
    return [*tasks, task]


def complete_task(
    tasks: list[Task],
    task_id: int,
    completed_by: str,
    completed_at: str,
    comment: str = "",
) -> list[Task]:
    """Mark a task completed, recording who and when."""
    i = _index_of(tasks, task_id)
    done = replace(
        tasks[i],
        completed=True,
        completed_by=completed_by,
        completed_at=completed_at,
        completion_comment=comment or None,
    )
    return _replace_at(tasks, i, done)


def add_comment(
    tasks: list[Task],
    task_id: int,
    author: str,
    content: str,
    timestamp: str,
) -> list[Task]:
    """Append a comment to a task."""
    i = _index_of(tasks, task_id)
    task = tasks[i]
    comment_id = max((c.id for c in task.comments), default=0) + 1
    comment = TaskComment(id=comment_id, author=author, content=content, timestamp=timestamp)
    return _replace_at(tasks, i, replace(task, comments=(*task.comments, comment)))


def update_task(tasks: list[Task], task_id: int, **changes) -> list[Task]:
    """Replace fields on a task. The id and comment history cannot be changed."""
    if "id" in changes or "comments" in changes:
        raise ValueError("id and comments cannot be updated")
    i = _index_of(tasks, task_id)
    if "priority" in changes:
        changes["priority"] = Priority.parse(changes["priority"])
    if "due_date" in changes:
        changes["due_date"] = parse_due_date(changes["due_date"])
    return _replace_at(tasks, i, replace(tasks[i], **changes))


def delete_task(tasks: list[Task], task_id: int) -> list[Task]:
    """Remove a task."""
    i = _index_of(tasks, task_id)
    return [*tasks[:i], *tasks[i + 1 :]]
