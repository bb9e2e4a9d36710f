"""School data repository interface."""

from datetime import date
from typing import Protocol

from flexwise.core.lessons import Lesson, SubstituteLesson
from flexwise.core.schedule import ScheduleEntry
from flexwise.core.students import Student


class SchoolRepository(Protocol):
    """Interface for read-only school records (students, lessons, timetable)."""

    def fetch_students(self) -> list[Student]:
        """Fetch all students."""
        ...

    def fetch_substitute_lessons(self, as_of: date) -> list[SubstituteLesson]:
        """Fetch substitute lessons known on the given day."""
        ...

    def fetch_lessons(self, target_date: date) -> list[Lesson]:
        """Fetch the lessons held on a specific date."""
        ...

    def fetch_schedule(self) -> list[ScheduleEntry]:
        """Fetch the timetable entries."""
        ...
