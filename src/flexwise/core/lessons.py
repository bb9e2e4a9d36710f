"""Pure lesson and attendance logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum

GERMAN_WEEKDAYS = ("Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag")


def parse_time_range(value: str) -> tuple[time, time]:
    """Parse "13:30 - 14:15" into (start, end)."""
    start, _, end = value.partition("-")
    return time.fromisoformat(start.strip()), time.fromisoformat(end.strip())


def format_lesson_date(day: date) -> str:
    """German long date, e.g. "Donnerstag, 11.01.2024"."""
    return f"{GERMAN_WEEKDAYS[day.weekday()]}, {day.strftime('%d.%m.%Y')}"


@dataclass(frozen=True)
class SubstituteLesson:
    """A lesson taken over from another teacher."""

    date: date
    start: time
    end: time
    class_name: str
    subject: str
    room: str
    for_teacher: str

    def format_time(self) -> str:
        return f"{self.start.strftime('%H:%M')} - {self.end.strftime('%H:%M')}"

    @classmethod
    def from_dict(cls, data: dict) -> "SubstituteLesson":
        start, end = parse_time_range(data["time"])
        return cls(
            date=date.fromisoformat(data["date"]),
            start=start,
            end=end,
            class_name=data.get("class", ""),
            subject=data.get("subject", ""),
            room=data.get("room", ""),
            for_teacher=data.get("forTeacher", ""),
        )


def get_substitute_lessons(
    lessons: list[SubstituteLesson] | None,
    as_of: date | datetime,
) -> list[SubstituteLesson]:
    """
    Substitute lessons from the day of as_of onwards, in timetable order.

    Pure function - no I/O.
    """
    if not lessons:
        return []
    today = as_of.date() if isinstance(as_of, datetime) else as_of
    return sorted(
        (lesson for lesson in lessons if lesson.date >= today),
        key=lambda lesson: (lesson.date, lesson.start),
    )


class LessonStatus(Enum):
    CANCELLED = "cancelled"
    CURRENT = "current"
    UPCOMING = "upcoming"
    SUBSTITUTE = "substitute"
    REGULAR = "regular"


def is_lesson_current(start: datetime, end: datetime, now: datetime) -> bool:
    return start <= now <= end


def is_lesson_upcoming(
    start: datetime,
    now: datetime,
    window: timedelta = timedelta(minutes=30),
) -> bool:
    """Lesson starts after now but within the window."""
    return now < start <= now + window


def lesson_status(
    is_current: bool,
    is_upcoming: bool,
    is_substitute: bool,
    is_cancelled: bool,
) -> LessonStatus:
    """Display status; cancelled wins over current, upcoming, substitute."""
    if is_cancelled:
        return LessonStatus.CANCELLED
    if is_current:
        return LessonStatus.CURRENT
    if is_upcoming:
        return LessonStatus.UPCOMING
    if is_substitute:
        return LessonStatus.SUBSTITUTE
    return LessonStatus.REGULAR


def needs_attendance_tracking(
    lesson_start: time,
    selected_date: date,
    now: datetime,
    is_current: bool = False,
) -> bool:
    """Attendance is taken only for today's lessons that are running or over."""
    if selected_date != now.date():
        return False
    if is_current:
        return True
    return now.time() >= lesson_start


@dataclass(frozen=True)
class LessonAttendance:
    """Names recorded per attendance state."""

    present: tuple[str, ...] = ()
    late: tuple[str, ...] = ()
    absent: tuple[str, ...] = ()


@dataclass(frozen=True)
class AttendanceBadge:
    """Server-side attendance counts; preferred over recorded lists."""

    total_students: int
    present_count: int
    late_count: int
    absent_count: int
    attendance_status: str


@dataclass(frozen=True)
class Lesson:
    """A timetable lesson as shown in the Klassenbuch."""

    id: str
    subject: str
    class_name: str
    room: str
    start: time
    end: time
    enrolled: int
    attendance_taken: bool = False
    attendance: LessonAttendance | None = None
    badge: AttendanceBadge | None = None
    pre_existing_absences: tuple[str, ...] = field(default_factory=tuple)
    is_substitute: bool = False
    is_cancelled: bool = False

    def starts_at(self, day: date) -> datetime:
        return datetime.combine(day, self.start)

    def ends_at(self, day: date) -> datetime:
        return datetime.combine(day, self.end)


def lesson_status_at(
    lesson: Lesson,
    day: date,
    now: datetime,
    window: timedelta = timedelta(minutes=30),
) -> LessonStatus:
    """Status of a lesson held on ``day`` as seen at ``now``."""
    start = lesson.starts_at(day)
    end = lesson.ends_at(day)
    if now.tzinfo is not None:
        start = start.replace(tzinfo=now.tzinfo)
        end = end.replace(tzinfo=now.tzinfo)
    return lesson_status(
        is_current=is_lesson_current(start, end, now),
        is_upcoming=is_lesson_upcoming(start, now, window),
        is_substitute=lesson.is_substitute,
        is_cancelled=lesson.is_cancelled,
    )


@dataclass(frozen=True)
class AttendanceNumbers:
    present: int
    missing: int
    absent: int
    potential_present: int


def attendance_status(lesson: Lesson) -> str:
    """'none', 'incomplete' or 'complete'."""
    if lesson.badge:
        return lesson.badge.attendance_status
    if not lesson.attendance:
        return "none"
    a = lesson.attendance
    recorded = len(a.present) + len(a.late) + len(a.absent)
    if recorded == 0:
        return "none"
    if recorded == lesson.enrolled:
        return "complete"
    return "incomplete"


def attendance_summary(lesson: Lesson) -> dict[str, int] | None:
    """Present/late/absent counts, or None if nothing was recorded."""
    if lesson.badge:
        return {
            "present": lesson.badge.present_count,
            "late": lesson.badge.late_count,
            "absent": lesson.badge.absent_count,
        }
    if not lesson.attendance:
        return None
    a = lesson.attendance
    return {"present": len(a.present), "late": len(a.late), "absent": len(a.absent)}


def attendance_numbers(lesson: Lesson) -> AttendanceNumbers:
    """
    Counts for the attendance badge.

    Late students count as present. Before attendance is recorded, students
    already known to be absent (sick notes etc.) are counted as absent.
    """
    if lesson.badge:
        b = lesson.badge
        present = b.present_count + b.late_count
        return AttendanceNumbers(
            present=present,
            missing=b.total_students - present - b.absent_count,
            absent=b.absent_count,
            potential_present=b.total_students - b.absent_count,
        )

    if not lesson.attendance:
        known_absent = len(lesson.pre_existing_absences)
        return AttendanceNumbers(
            present=0,
            missing=lesson.enrolled - known_absent,
            absent=known_absent,
            potential_present=lesson.enrolled - known_absent,
        )

    a = lesson.attendance
    present = len(a.present) + len(a.late)
    absent = len(a.absent)
    return AttendanceNumbers(
        present=present,
        missing=lesson.enrolled - present - absent,
        absent=absent,
        potential_present=lesson.enrolled - absent,
    )
