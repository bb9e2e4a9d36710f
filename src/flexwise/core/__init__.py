"""Functional core - pure business logic with no I/O."""

from .tasks import (
    Task,
    TaskComment,
    TaskFilters,
    Priority,
    DueDateBucket,
    TaskSort,
    filter_by_search,
    filter_by_priority,
    filter_by_due_date_bucket,
    filter_by_flag,
    sort_by_priority,
    sort_by_due_date,
    build_task_view,
)
from .abbreviations import subject_abbreviation, mobile_teacher_abbreviation, teacher_abbreviation
from .lessons import Lesson, SubstituteLesson, get_substitute_lessons, attendance_numbers
from .students import Student, filter_and_sort_students, unenrolled_students
from .schedule import ScheduleEntry, SchedulerFilters
from .notes import create_lesson_note, parse_lesson_note

__all__ = [
    # Tasks
    "Task",
    "TaskComment",
    "TaskFilters",
    "Priority",
    "DueDateBucket",
    "TaskSort",
    "filter_by_search",
    "filter_by_priority",
    "filter_by_due_date_bucket",
    "filter_by_flag",
    "sort_by_priority",
    "sort_by_due_date",
    "build_task_view",
    # Abbreviations
    "subject_abbreviation",
    "mobile_teacher_abbreviation",
    "teacher_abbreviation",
    # Lessons
    "Lesson",
    "SubstituteLesson",
    "get_substitute_lessons",
    "attendance_numbers",
    # Students
    "Student",
    "filter_and_sort_students",
    "unenrolled_students",
    # Scheduler
    "ScheduleEntry",
    "SchedulerFilters",
    # Notes
    "create_lesson_note",
    "parse_lesson_note",
]
