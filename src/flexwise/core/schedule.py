"""Pure timetable scheduler filtering - no I/O dependencies."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ScheduleEntry:
    """A single timetable slot."""

    id: str
    teacher_ids: tuple[str, ...]
    class_id: str | None
    room_id: str | None
    subject: str = ""
    day: int = 0
    period: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleEntry":
        return cls(
            id=str(data["id"]),
            teacher_ids=tuple(data.get("teacher_ids") or ()),
            class_id=data.get("class_id"),
            room_id=data.get("room_id"),
            subject=data.get("subject", ""),
            day=int(data.get("day", 0)),
            period=int(data.get("period", 0)),
        )


@dataclass(frozen=True)
class SchedulerFilters:
    """Selected teachers, class and room. Updates return a new value."""

    teacher_ids: tuple[str, ...] = ()
    class_id: str | None = None
    room_id: str | None = None

    def __post_init__(self):
        # An empty id means "no selection"
        object.__setattr__(self, "class_id", self.class_id or None)
        object.__setattr__(self, "room_id", self.room_id or None)

    def toggle_teacher(self, teacher_id: str) -> "SchedulerFilters":
        if teacher_id in self.teacher_ids:
            remaining = tuple(t for t in self.teacher_ids if t != teacher_id)
            return replace(self, teacher_ids=remaining)
        return replace(self, teacher_ids=(*self.teacher_ids, teacher_id))

    def with_class(self, class_id: str | None) -> "SchedulerFilters":
        return replace(self, class_id=class_id)

    def with_room(self, room_id: str | None) -> "SchedulerFilters":
        return replace(self, room_id=room_id)

    def cleared(self) -> "SchedulerFilters":
        return SchedulerFilters()

    def is_teacher_selected(self, teacher_id: str) -> bool:
        return teacher_id in self.teacher_ids

    def has_active_filters(self) -> bool:
        return self.active_filter_count() > 0

    def active_filter_count(self) -> int:
        """Number of filter kinds in use (teachers count once)."""
        return sum([bool(self.teacher_ids), bool(self.class_id), bool(self.room_id)])

    def apply(self, entries: list[ScheduleEntry] | None) -> list[ScheduleEntry]:
        """
        Entries matching every active filter.

        An entry matches the teacher filter if any of its teachers is selected.
        """
        if not entries:
            return []
        result = list(entries)
        if self.teacher_ids:
            selected = set(self.teacher_ids)
            result = [e for e in result if selected.intersection(e.teacher_ids)]
        if self.class_id:
            result = [e for e in result if e.class_id == self.class_id]
        if self.room_id:
            result = [e for e in result if e.room_id == self.room_id]
        return result
