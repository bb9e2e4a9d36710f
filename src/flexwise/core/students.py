"""Pure student list logic for course enrollment - no I/O dependencies."""

from dataclasses import dataclass

GO_HOME = "go-home"


@dataclass(frozen=True)
class Student:
    """A student with afternoon course choices."""

    id: str
    name: str
    class_name: str = ""
    current_enrollment: str | None = None
    first_choice: str | None = None
    second_choice: str | None = None
    third_choice: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            class_name=data.get("class") or "",
            current_enrollment=data.get("current_enrollment"),
            first_choice=data.get("first_choice"),
            second_choice=data.get("second_choice"),
            third_choice=data.get("third_choice"),
        )


def filter_and_sort_students(students: list[Student] | None, query: str | None) -> list[Student]:
    """
    Search by name or class, then order by class and name.

    Pure function - no I/O.
    """
    if not students:
        return []
    if query:
        needle = query.lower()
        students = [s for s in students if needle in s.name.lower() or needle in s.class_name.lower()]
    return sorted(students, key=lambda s: (s.class_name.casefold(), s.name.casefold()))


def unenrolled_students(students: list[Student] | None, query: str | None = None) -> list[Student]:
    """Students without an enrollment who did not pick going home first."""
    if not students:
        return []
    pending = [s for s in students if s.current_enrollment is None and s.first_choice != GO_HOME]
    return filter_and_sort_students(pending, query)
