"""Shared workflow layer for the CLI.

Each function loads data through an adapter, resolves "now" from the
configured timezone when the caller did not pass one, runs the pure core
and, for task actions, writes the result back.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .adapters.json_store import JsonTaskStore
from .adapters.mock_data import MockSchoolData
from .config import Config
from .core.lessons import Lesson, SubstituteLesson, get_substitute_lessons
from .core.notes import format_timestamp
from .core.students import Student, filter_and_sort_students, unenrolled_students
from .core import tasks as task_core
from .core.schedule import ScheduleEntry, SchedulerFilters
from .core.tasks import Task, TaskFilters, TaskSort, build_task_view
from .ports import SchoolRepository, TaskRepository

logger = logging.getLogger(__name__)


def current_time(config: Config) -> datetime:
    """The only place that reads the clock."""
    return datetime.now(ZoneInfo(config.timezone))


def get_task_store(config: Config) -> JsonTaskStore:
    return JsonTaskStore(config.tasks_path)


def seed_tasks(config: Config, force: bool = False) -> bool:
    """Write the sample task list. Returns False if tasks already exist."""
    store = get_task_store(config)
    if store.path.exists() and not force:
        return False
    store.save_all(MockSchoolData().fetch_tasks())
    logger.info(f"Seeded sample tasks into {store.path}")
    return True


def list_tasks(
    config: Config,
    filters: TaskFilters,
    sort: TaskSort,
    as_of: datetime | None = None,
) -> list[Task]:
    """Load tasks and return the filtered, sorted view."""
    as_of = as_of or current_time(config)
    tasks = get_task_store(config).fetch_all()
    view = build_task_view(tasks, filters, as_of, sort)
    logger.debug(f"{len(view)} of {len(tasks)} tasks match {filters}")
    return view


def _find(tasks: list[Task], task_id: int) -> Task:
    return next(t for t in tasks if t.id == task_id)


def _update_stored(store: TaskRepository, action: Callable[[list[Task]], list[Task]]) -> list[Task]:
    tasks = action(store.fetch_all())
    store.save_all(tasks)
    return tasks


def add_task(
    config: Config,
    title: str,
    description: str = "",
    priority: str = "low",
    due_date: str | None = None,
    hot_list: bool = False,
    assigned_to: tuple[str, ...] = (),
    as_of: datetime | None = None,
) -> Task:
    """Create a stored task authored by the configured teacher."""
    as_of = as_of or current_time(config)
    tasks = _update_stored(
        get_task_store(config),
        lambda ts: task_core.add_task(
            ts,
            title,
            config.teacher_name,
            format_timestamp(as_of),
            description=description,
            priority=priority,
            due_date=due_date,
            hot_list=hot_list,
            assigned_to=assigned_to,
        ),
    )
    return tasks[-1]


def complete_task(
    config: Config,
    task_id: int,
    comment: str = "",
    as_of: datetime | None = None,
) -> Task:
    """Mark a stored task completed by the configured teacher."""
    as_of = as_of or current_time(config)
    tasks = _update_stored(
        get_task_store(config),
        lambda ts: task_core.complete_task(
            ts, task_id, config.teacher_name, format_timestamp(as_of), comment
        ),
    )
    return _find(tasks, task_id)


def comment_on_task(
    config: Config,
    task_id: int,
    content: str,
    as_of: datetime | None = None,
) -> Task:
    """Append a comment from the configured teacher to a stored task."""
    as_of = as_of or current_time(config)
    tasks = _update_stored(
        get_task_store(config),
        lambda ts: task_core.add_comment(
            ts, task_id, config.teacher_name, content, format_timestamp(as_of)
        ),
    )
    return _find(tasks, task_id)


def delete_task(config: Config, task_id: int) -> None:
    _update_stored(get_task_store(config), lambda ts: task_core.delete_task(ts, task_id))


def list_substitutes(
    config: Config,
    as_of: datetime | None = None,
    repo: SchoolRepository | None = None,
) -> list[SubstituteLesson]:
    """Upcoming substitute lessons."""
    as_of = as_of or current_time(config)
    repo = repo or MockSchoolData()
    return get_substitute_lessons(repo.fetch_substitute_lessons(as_of.date()), as_of)


def list_students(
    query: str | None = None,
    unenrolled: bool = False,
    repo: SchoolRepository | None = None,
) -> list[Student]:
    repo = repo or MockSchoolData()
    students = repo.fetch_students()
    if unenrolled:
        return unenrolled_students(students, query)
    return filter_and_sort_students(students, query)


def list_lessons(
    target_date: date,
    repo: SchoolRepository | None = None,
) -> list[Lesson]:
    """Lessons of a day in timetable order."""
    repo = repo or MockSchoolData()
    return sorted(repo.fetch_lessons(target_date), key=lambda lesson: lesson.start)


def list_schedule(
    filters: SchedulerFilters,
    repo: SchoolRepository | None = None,
) -> list[ScheduleEntry]:
    repo = repo or MockSchoolData()
    return filters.apply(repo.fetch_schedule())
