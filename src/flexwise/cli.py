"""FlexWise CLI - school administration helpers."""

import json
import logging
import sys
from datetime import datetime, timedelta

import click

from .adapters.json_store import DataFileError
from .config import SORT_CHOICES, Config, load_config
from .core.abbreviations import (
    mobile_teacher_abbreviation,
    register_abbreviation,
    subject_abbreviation,
)
from .core.lessons import attendance_numbers, attendance_status, format_lesson_date, lesson_status_at
from .core.schedule import SchedulerFilters
from .core.tasks import (
    DueDateBucket,
    Priority,
    Task,
    TaskFilters,
    TaskNotFoundError,
    TaskSort,
    parse_priority_selector,
)
from . import workflows

AS_OF = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"])
PRIORITY_CHOICES = ["all", *(p.value for p in Priority)]
BUCKET_CHOICES = [b.value for b in DueDateBucket]


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="flexwise")
@click.pass_context
def main(ctx, debug: bool):
    """FlexWise - school administration CLI."""
    config = load_config()
    level = logging.getLevelNamesMapping().get(config.log_level, logging.WARNING)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else level,
    )
    ctx.obj = config


def _show_tasks(tasks: list[Task], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False))
        return

    if not tasks:
        click.echo("No matching tasks.")
        return

    for task in tasks:
        check = "x" if task.completed else " "
        hot = "*" if task.hot_list else " "
        due = f" (due {task.due_date})" if task.due_date else ""
        click.echo(f"[{check}]{hot} {task.id:>3} {task.priority.value:<7} {task.title}{due}")


@main.command()
@click.option("--force", is_flag=True, help="Overwrite an existing task file")
@click.pass_obj
def init(config: Config, force: bool):
    """Create the task file with sample tasks."""
    if workflows.seed_tasks(config, force=force):
        click.echo(f"Wrote sample tasks to {config.tasks_path}")
    else:
        click.echo(f"{config.tasks_path} already exists (use --force to overwrite).")


@main.command()
@click.option("--search", "-s", default="", help="Match title or description")
@click.option("--priority", "-p", type=click.Choice(PRIORITY_CHOICES), default="all")
@click.option("--due", "-d", type=click.Choice(BUCKET_CHOICES), default="all")
@click.option("--hot", is_flag=True, help="Hot list only")
@click.option("--show-completed/--hide-completed", default=None, help="Include completed tasks")
@click.option("--sort", type=click.Choice(SORT_CHOICES), default=None)
@click.option("--as-of", type=AS_OF, default=None, help="Reference date (default: now)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def tasks(
    config: Config,
    search: str,
    priority: str,
    due: str,
    hot: bool,
    show_completed: bool | None,
    sort: str | None,
    as_of: datetime | None,
    as_json: bool,
):
    """List To-Do-List tasks."""
    filters = TaskFilters(
        search=search,
        priority=parse_priority_selector(priority),
        due=DueDateBucket.parse(due),
        hot_list_only=hot,
        show_completed=config.show_completed if show_completed is None else show_completed,
    )
    try:
        view = workflows.list_tasks(config, filters, TaskSort(sort or config.default_sort), as_of)
    except DataFileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_tasks(view, as_json)


@main.group()
def task():
    """Change a single task."""
    pass


@task.command("add")
@click.argument("title")
@click.option("--description", default="", help="Task description")
@click.option("--priority", "-p", type=click.Choice([p.value for p in Priority]), default="low")
@click.option("--due", default=None, help="Due date (YYYY-MM-DD)")
@click.option("--hot", is_flag=True, help="Put the task on the hot list")
@click.option("--assign", "assigned_to", multiple=True, help="Assignee (repeatable)")
@click.pass_obj
def task_add(
    config: Config,
    title: str,
    description: str,
    priority: str,
    due: str | None,
    hot: bool,
    assigned_to: tuple[str, ...],
):
    """Create a new task."""
    try:
        created = workflows.add_task(config, title, description, priority, due, hot, assigned_to)
    except (ValueError, DataFileError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Added task {created.id}: {created.title}")


@task.command("complete")
@click.argument("task_id", type=int)
@click.option("--comment", "-c", default="", help="Completion comment")
@click.pass_obj
def task_complete(config: Config, task_id: int, comment: str):
    """Mark a task as done."""
    try:
        done = workflows.complete_task(config, task_id, comment)
    except (TaskNotFoundError, DataFileError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Completed: {done.title}")


@task.command("comment")
@click.argument("task_id", type=int)
@click.argument("content")
@click.pass_obj
def task_comment(config: Config, task_id: int, content: str):
    """Add a comment to a task."""
    try:
        updated = workflows.comment_on_task(config, task_id, content)
    except (TaskNotFoundError, DataFileError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"{updated.title}: {len(updated.comments)} comment(s)")


@task.command("delete")
@click.argument("task_id", type=int)
@click.pass_obj
def task_delete(config: Config, task_id: int):
    """Delete a task."""
    try:
        workflows.delete_task(config, task_id)
    except (TaskNotFoundError, DataFileError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Deleted task {task_id}")


@main.command()
@click.option("--search", "-s", default="", help="Match name or class")
@click.option("--unenrolled", is_flag=True, help="Only students still without a course")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def students(search: str, unenrolled: bool, as_json: bool):
    """List students by class and name."""
    result = workflows.list_students(search, unenrolled)

    if as_json:
        click.echo(
            json.dumps(
                [{"id": s.id, "name": s.name, "class": s.class_name} for s in result],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not result:
        click.echo("No students found.")
        return

    for student in result:
        click.echo(f"{student.class_name:<4} {student.name}")


@main.command()
@click.option("--as-of", type=AS_OF, default=None, help="Reference date (default: now)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def substitutes(config: Config, as_of: datetime | None, as_json: bool):
    """Show upcoming substitute lessons."""
    lessons = workflows.list_substitutes(config, as_of)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "date": lesson.date.isoformat(),
                        "time": lesson.format_time(),
                        "class": lesson.class_name,
                        "subject": lesson.subject,
                        "room": lesson.room,
                        "forTeacher": lesson.for_teacher,
                    }
                    for lesson in lessons
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not lessons:
        click.echo("No substitute lessons.")
        return

    for lesson in lessons:
        click.echo(f"{format_lesson_date(lesson.date)}  {lesson.format_time()}")
        click.echo(f"  {lesson.class_name}, {lesson.subject}, {lesson.room} (für {lesson.for_teacher})")


@main.command()
@click.option("--as-of", type=AS_OF, default=None, help="Reference time (default: now)")
@click.pass_obj
def lessons(config: Config, as_of: datetime | None):
    """Show the day's lessons with attendance state."""
    now = as_of or workflows.current_time(config)
    day = now.date()
    result = workflows.list_lessons(day)
    window = timedelta(minutes=config.upcoming_window_minutes)

    if not result:
        click.echo(f"No lessons on {format_lesson_date(day)}.")
        return

    click.echo(format_lesson_date(day))
    for lesson in result:
        status = lesson_status_at(lesson, day, now, window)
        numbers = attendance_numbers(lesson)
        click.echo(
            f"  {lesson.start.strftime('%H:%M')} {subject_abbreviation(lesson.subject):<4}"
            f" {lesson.class_name:<10} {status.value:<10}"
            f" {attendance_status(lesson)} ({numbers.present}/{numbers.potential_present})"
        )


@main.command()
@click.option("--teacher", "-t", "teacher_ids", multiple=True, help="Teacher id (repeatable)")
@click.option("--class", "class_id", default=None, help="Class id")
@click.option("--room", "room_id", default=None, help="Room id")
def schedule(teacher_ids: tuple[str, ...], class_id: str | None, room_id: str | None):
    """Show timetable entries matching the filters."""
    filters = SchedulerFilters()
    for teacher_id in teacher_ids:
        if not filters.is_teacher_selected(teacher_id):
            filters = filters.toggle_teacher(teacher_id)
    filters = filters.with_class(class_id).with_room(room_id)

    entries = workflows.list_schedule(filters)
    if filters.has_active_filters():
        click.echo(f"{filters.active_filter_count()} filter(s) active")
    if not entries:
        click.echo("No timetable entries.")
        return
    for entry in entries:
        click.echo(
            f"  day {entry.day} period {entry.period}: {subject_abbreviation(entry.subject)}"
            f" {entry.class_id or '-'} {entry.room_id or '-'}"
        )


@main.group()
def abbrev():
    """Shorten subject and teacher names."""
    pass


@abbrev.command("subject")
@click.argument("name")
def abbrev_subject(name: str):
    click.echo(subject_abbreviation(name))


@abbrev.command("teacher")
@click.argument("name")
@click.option("--register", is_flag=True, help="Use the Klassenbuch register code")
def abbrev_teacher(name: str, register: bool):
    click.echo(register_abbreviation(name) if register else mobile_teacher_abbreviation(name))


if __name__ == "__main__":
    main()
