"""Built-in sample school data, used until a real backend is connected."""

from datetime import date, time, timedelta

from flexwise.core.lessons import Lesson, LessonAttendance, SubstituteLesson
from flexwise.core.schedule import ScheduleEntry
from flexwise.core.students import Student
from flexwise.core.tasks import Task

INITIAL_TASKS = [
    {
        "id": 1,
        "title": "Klassenarbeiten Mathematik 8a korrigieren",
        "description": "Korrektur der Klassenarbeit zu Gleichungssystemen vom 15.08.2024.",
        "completed": False,
        "priority": "high",
        "dueDate": "2024-08-25",
        "hotList": True,
        "assignedTo": ["Frau Müller"],
        "createdBy": "Frau Müller",
        "createdAt": "20.08.2024 08:30",
        "comments": [],
    },
    {
        "id": 2,
        "title": "Elterngespräche 7b vorbereiten",
        "description": "Vorbereitung der Einzelgespräche für den Elternabend am 30.08.",
        "completed": False,
        "priority": "medium",
        "dueDate": "2024-08-28",
        "hotList": False,
        "assignedTo": ["Frau Müller"],
        "createdBy": "Frau Müller",
        "createdAt": "19.08.2024 14:15",
        "comments": [
            {
                "id": 1,
                "text": "Bereits 12 Termine vereinbart",
                "timestamp": "20.08.2024 10:15",
                "author": "Frau Müller",
            }
        ],
    },
]

STUDENTS = [
    {"id": "s1", "name": "Lena Braun", "class": "5a", "first_choice": "chess"},
    {"id": "s2", "name": "Jonas Keller", "class": "5b", "current_enrollment": "football"},
    {"id": "s3", "name": "Mia Schulz", "class": "5a", "first_choice": "go-home"},
    {"id": "s4", "name": "Paul Wagner", "class": "6a", "first_choice": "choir", "second_choice": "go-home"},
    {"id": "s5", "name": "Emma Becker", "class": "5b", "first_choice": "art"},
]

SCHEDULE = [
    {"id": "e1", "teacher_ids": ["t1"], "class_id": "8a", "room_id": "r112", "subject": "Mathematik", "day": 0, "period": 1},
    {"id": "e2", "teacher_ids": ["t2", "t3"], "class_id": "7b", "room_id": "r204", "subject": "Geschichte", "day": 0, "period": 2},
    {"id": "e3", "teacher_ids": ["t3"], "class_id": "8a", "room_id": "r204", "subject": "Deutsch", "day": 1, "period": 1},
]


class MockSchoolData:
    """
    In-memory school data.

    Implements SchoolRepository protocol. Substitute lessons are generated
    relative to the requested day so the sample always has upcoming entries.
    """

    def fetch_tasks(self) -> list[Task]:
        return [Task.from_dict(t) for t in INITIAL_TASKS]

    def fetch_students(self) -> list[Student]:
        return [Student.from_dict(s) for s in STUDENTS]

    def fetch_substitute_lessons(self, as_of: date) -> list[SubstituteLesson]:
        return [
            SubstituteLesson(
                date=as_of + timedelta(days=1),
                start=time(13, 30),
                end=time(14, 15),
                class_name="Klasse 9A",
                subject="Deutsch",
                room="Raum 112",
                for_teacher="Frau Weber",
            ),
            SubstituteLesson(
                date=as_of + timedelta(days=2),
                start=time(9, 0),
                end=time(9, 45),
                class_name="Klasse 8B",
                subject="Geschichte",
                room="Raum 204",
                for_teacher="Dr. Hoffmann",
            ),
        ]

    def fetch_lessons(self, target_date: date) -> list[Lesson]:
        if target_date.weekday() >= 5:
            return []
        return [
            Lesson(
                id=f"{target_date.isoformat()}-1",
                subject="Mathematik",
                class_name="8a",
                room="Raum 112",
                start=time(8, 0),
                end=time(8, 45),
                enrolled=4,
                attendance_taken=True,
                attendance=LessonAttendance(
                    present=("Lena Braun", "Jonas Keller"),
                    late=("Mia Schulz",),
                    absent=("Paul Wagner",),
                ),
            ),
            Lesson(
                id=f"{target_date.isoformat()}-2",
                subject="Englisch",
                class_name="7b",
                room="Raum 204",
                start=time(9, 50),
                end=time(10, 35),
                enrolled=25,
                pre_existing_absences=("Emma Becker",),
            ),
            Lesson(
                id=f"{target_date.isoformat()}-3",
                subject="Deutsch",
                class_name="Klasse 9A",
                room="Raum 112",
                start=time(13, 30),
                end=time(14, 15),
                enrolled=22,
                is_substitute=True,
            ),
        ]

    def fetch_schedule(self) -> list[ScheduleEntry]:
        return [ScheduleEntry.from_dict(e) for e in SCHEDULE]
