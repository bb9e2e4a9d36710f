"""Tests for core task filtering and sorting."""

from datetime import date, datetime, timedelta

import pytest

from flexwise.core.tasks import (
    DueDateBucket,
    Priority,
    Task,
    TaskComment,
    TaskFilters,
    TaskFlag,
    TaskNotFoundError,
    TaskSort,
    add_comment,
    add_task,
    apply_filters,
    build_task_view,
    complete_task,
    delete_task,
    filter_by_due_date_bucket,
    filter_by_flag,
    filter_by_priority,
    filter_by_search,
    filter_completed,
    filter_hot_list,
    next_task_id,
    parse_due_date,
    parse_priority_selector,
    priority_rank,
    sort_by_due_date,
    sort_by_priority,
    update_task,
)


@pytest.fixture
def today():
    return date(2024, 1, 8)


@pytest.fixture
def sample_tasks(today):
    return [
        Task(
            id=1,
            title="Klassenarbeit korrigieren",
            description="Mathematik 8a",
            priority=Priority.HIGH,
            due_date=today,
            hot_list=True,
        ),
        Task(
            id=2,
            title="Elternabend vorbereiten",
            description="Einladungen verschicken",
            priority=Priority.MEDIUM,
            due_date=today + timedelta(days=1),
        ),
        Task(
            id=3,
            title="Zeugnisse",
            description="Noten eintragen",
            priority=Priority.URGENT,
            due_date=today - timedelta(days=3),
        ),
        Task(
            id=4,
            title="Ausflug planen",
            description="Museum anfragen",
            priority=Priority.LOW,
            due_date=today - timedelta(days=5),
            completed=True,
        ),
        Task(
            id=5,
            title="Raumplan",
            description="",
            priority=Priority.MEDIUM,
            due_date=today + timedelta(days=7),
            hot_list=True,
        ),
        Task(id=6, title="Ohne Termin", priority=Priority.HIGH, due_date=None),
    ]


def ids(tasks: list[Task]) -> list[int]:
    return [t.id for t in tasks]


class TestParsing:
    def test_priority_parse_known(self):
        assert Priority.parse("urgent") is Priority.URGENT
        assert Priority.parse(" High ") is Priority.HIGH

    def test_priority_parse_unknown_falls_back_to_low(self):
        assert Priority.parse("critical") is Priority.LOW

    def test_priority_rank_table(self):
        assert [p.rank for p in Priority] == [0, 1, 2, 3]
        assert priority_rank("urgent") == 3
        assert priority_rank("bogus") == 0

    def test_priority_rank_normalizes_case(self):
        assert priority_rank("URGENT") == 3
        assert priority_rank(" High ") == 2
        assert priority_rank(Priority.MEDIUM) == 1

    def test_priority_selector(self):
        assert parse_priority_selector("all") is None
        assert parse_priority_selector("") is None
        assert parse_priority_selector("unknown") is None
        assert parse_priority_selector("medium") is Priority.MEDIUM

    def test_bucket_parse(self):
        assert DueDateBucket.parse("this_week") is DueDateBucket.THIS_WEEK
        assert DueDateBucket.parse("this-week") is DueDateBucket.THIS_WEEK
        assert DueDateBucket.parse("someday") is DueDateBucket.ALL
        assert DueDateBucket.parse(None) is DueDateBucket.ALL

    def test_parse_due_date_iso(self):
        assert parse_due_date("2024-01-05") == date(2024, 1, 5)

    def test_parse_due_date_datetime_string(self):
        assert parse_due_date("2024-01-05T10:00:00") == date(2024, 1, 5)

    def test_parse_due_date_malformed(self):
        assert parse_due_date("05.01.2024") is None
        assert parse_due_date("not a date") is None
        assert parse_due_date("") is None
        assert parse_due_date(None) is None

    def test_parse_due_date_passthrough(self):
        assert parse_due_date(datetime(2024, 1, 5, 9, 30)) == date(2024, 1, 5)
        assert parse_due_date(date(2024, 1, 5)) == date(2024, 1, 5)


class TestTaskDict:
    def test_from_dict(self):
        task = Task.from_dict(
            {
                "id": 2,
                "title": "Elterngespräche",
                "description": None,
                "priority": "medium",
                "dueDate": "2024-08-28",
                "hotList": True,
                "assignedTo": ["Frau Müller"],
                "assignedBy": "Frau Müller",
                "comments": [{"id": 1, "text": "12 Termine", "author": "Frau Müller", "timestamp": "t"}],
            }
        )
        assert task.priority is Priority.MEDIUM
        assert task.due_date == date(2024, 8, 28)
        assert task.hot_list is True
        assert task.description == ""
        assert task.created_by == "Frau Müller"
        assert task.assigned_to == ("Frau Müller",)
        assert task.comments[0].content == "12 Termine"

    def test_from_dict_invalid_date(self):
        task = Task.from_dict({"id": 1, "title": "x", "dueDate": "garbage"})
        assert task.due_date is None

    @pytest.mark.parametrize("title", [None, 42, ["Zeugnisse"]])
    def test_from_dict_rejects_non_text_title(self, title):
        with pytest.raises(ValueError):
            Task.from_dict({"id": 1, "title": title})

    def test_from_dict_rejects_missing_title(self):
        with pytest.raises(ValueError):
            Task.from_dict({"id": 1})

    def test_from_dict_rejects_non_text_description(self):
        with pytest.raises(ValueError):
            Task.from_dict({"id": 1, "title": "x", "description": 7})

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (True, True),
            (False, False),
            ("true", True),
            ("false", False),
            ("False", False),
            ("0", False),
            ("yes", True),
            (1, True),
            (0, False),
            (None, False),
        ],
    )
    def test_from_dict_flags(self, raw, expected):
        task = Task.from_dict({"id": 1, "title": "x", "completed": raw, "hotList": raw})
        assert task.completed is expected
        assert task.hot_list is expected

    def test_from_dict_unreadable_flag_is_false(self, caplog):
        with caplog.at_level("WARNING"):
            task = Task.from_dict({"id": 1, "title": "x", "completed": "maybe"})
        assert task.completed is False
        assert "completed" in caplog.text

    def test_string_false_completed_stays_visible(self, today):
        task = Task.from_dict({"id": 1, "title": "x", "completed": "false"})
        assert apply_filters([task], TaskFilters(show_completed=False), today) == [task]

    def test_to_dict_round_trip(self, sample_tasks):
        task = sample_tasks[0]
        assert Task.from_dict(task.to_dict()) == task


class TestFilterBySearch:
    def test_matches_title_case_insensitive(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "ZEUGNISSE")) == [3]

    def test_matches_description(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "museum")) == [4]

    def test_empty_query_is_identity(self, sample_tasks):
        assert filter_by_search(sample_tasks, "") == sample_tasks

    def test_whitespace_query_is_identity(self, sample_tasks):
        assert filter_by_search(sample_tasks, "   ") == sample_tasks

    def test_returns_new_list(self, sample_tasks):
        result = filter_by_search(sample_tasks, "")
        assert result is not sample_tasks

    def test_no_match(self, sample_tasks):
        assert filter_by_search(sample_tasks, "xyz") == []


class TestFilterByPriority:
    @pytest.mark.parametrize("priority", list(Priority))
    def test_only_matching_priority(self, sample_tasks, priority):
        result = filter_by_priority(sample_tasks, priority)
        assert all(t.priority is priority for t in result)
        assert len(result) == sum(1 for t in sample_tasks if t.priority is priority)

    def test_all_keeps_everything(self, sample_tasks):
        assert filter_by_priority(sample_tasks, None) == sample_tasks
        assert filter_by_priority(sample_tasks, "all") == sample_tasks

    def test_string_selector(self, sample_tasks):
        assert ids(filter_by_priority(sample_tasks, "urgent")) == [3]

    def test_unknown_selector_means_all(self, sample_tasks):
        assert filter_by_priority(sample_tasks, "critical") == sample_tasks


class TestFilterByDueDateBucket:
    def test_today(self, sample_tasks, today):
        assert ids(filter_by_due_date_bucket(sample_tasks, DueDateBucket.TODAY, today)) == [1]

    def test_tomorrow(self, sample_tasks, today):
        assert ids(filter_by_due_date_bucket(sample_tasks, DueDateBucket.TOMORROW, today)) == [2]

    def test_this_week_inclusive(self, sample_tasks, today):
        result = filter_by_due_date_bucket(sample_tasks, DueDateBucket.THIS_WEEK, today)
        assert ids(result) == [1, 2, 5]

    def test_this_week_excludes_day_eight(self, today):
        task = Task(id=1, title="t", due_date=today + timedelta(days=8))
        assert filter_by_due_date_bucket([task], DueDateBucket.THIS_WEEK, today) == []

    def test_overdue_skips_completed(self, sample_tasks, today):
        assert ids(filter_by_due_date_bucket(sample_tasks, DueDateBucket.OVERDUE, today)) == [3]

    def test_all_is_identity(self, sample_tasks, today):
        assert filter_by_due_date_bucket(sample_tasks, DueDateBucket.ALL, today) == sample_tasks

    def test_string_bucket(self, sample_tasks, today):
        assert ids(filter_by_due_date_bucket(sample_tasks, "tomorrow", today)) == [2]

    def test_datetime_reference_uses_calendar_day(self, sample_tasks, today):
        late_evening = datetime.combine(today, datetime.max.time())
        assert ids(filter_by_due_date_bucket(sample_tasks, "today", late_evening)) == [1]

    @pytest.mark.parametrize(
        "bucket",
        [DueDateBucket.TODAY, DueDateBucket.TOMORROW, DueDateBucket.THIS_WEEK, DueDateBucket.OVERDUE],
    )
    def test_invalid_date_never_matches(self, today, bucket):
        task = Task.from_dict({"id": 1, "title": "t", "dueDate": "31.12.2023"})
        assert filter_by_due_date_bucket([task], bucket, today) == []

    def test_overdue_scenario(self):
        tasks = [
            Task(id=1, title="open", due_date=date(2024, 1, 5)),
            Task(id=2, title="done", due_date=date(2024, 1, 3), completed=True),
        ]
        result = filter_by_due_date_bucket(tasks, "overdue", datetime(2024, 1, 8, 12, 0))
        assert ids(result) == [1]


class TestFilterByFlag:
    def test_hot_list_only(self, sample_tasks):
        assert ids(filter_by_flag(sample_tasks, TaskFlag.HOT_LIST, True)) == [1, 5]

    def test_hot_list_disabled_keeps_all(self, sample_tasks):
        assert filter_hot_list(sample_tasks, False) == sample_tasks

    def test_hide_completed(self, sample_tasks):
        result = filter_by_flag(sample_tasks, TaskFlag.COMPLETED, False)
        assert 4 not in ids(result)
        assert len(result) == 5

    def test_show_completed_keeps_all(self, sample_tasks):
        assert filter_completed(sample_tasks, True) == sample_tasks


class TestSorting:
    def test_sort_by_priority_descending(self, sample_tasks):
        ranks = [t.priority_rank for t in sort_by_priority(sample_tasks)]
        assert ranks == sorted(ranks, reverse=True)

    def test_sort_by_priority_is_stable(self, sample_tasks):
        result = sort_by_priority(sample_tasks)
        # HIGH: 1 then 6, MEDIUM: 2 then 5 - original order kept
        assert ids(result) == [3, 1, 6, 2, 5, 4]

    def test_sort_by_due_date_ascending_invalid_last(self, sample_tasks):
        result = sort_by_due_date(sample_tasks)
        assert ids(result) == [4, 3, 1, 2, 5, 6]

    def test_sort_does_not_mutate(self, sample_tasks):
        before = list(sample_tasks)
        sort_by_priority(sample_tasks)
        sort_by_due_date(sample_tasks)
        assert sample_tasks == before

    def test_scenario(self):
        low = Task(id=1, title="low", priority=Priority.LOW, due_date=parse_due_date("2024-01-10"))
        urgent = Task(id=2, title="urgent", priority=Priority.URGENT, due_date=parse_due_date("2024-01-05"))
        assert sort_by_priority([low, urgent]) == [urgent, low]
        assert sort_by_due_date([low, urgent]) == [urgent, low]


class TestEmptyInput:
    @pytest.mark.parametrize("tasks", [None, []])
    def test_all_operations_return_empty(self, tasks, today):
        assert filter_by_search(tasks, "x") == []
        assert filter_by_priority(tasks, Priority.HIGH) == []
        assert filter_by_due_date_bucket(tasks, DueDateBucket.TODAY, today) == []
        assert filter_by_flag(tasks, TaskFlag.HOT_LIST, True) == []
        assert sort_by_priority(tasks) == []
        assert sort_by_due_date(tasks) == []
        assert build_task_view(tasks, TaskFilters(), today) == []


class TestComposition:
    def test_filters_are_idempotent(self, sample_tasks, today):
        filters = TaskFilters(search="e", due=DueDateBucket.THIS_WEEK, show_completed=False)
        once = apply_filters(sample_tasks, filters, today)
        assert apply_filters(once, filters, today) == once

    def test_conjunction(self, sample_tasks, today):
        filters = TaskFilters(priority=Priority.MEDIUM, hot_list_only=True)
        assert ids(apply_filters(sample_tasks, filters, today)) == [5]

    def test_order_independent(self, sample_tasks, today):
        a = filter_hot_list(filter_by_due_date_bucket(sample_tasks, "this_week", today), True)
        b = filter_by_due_date_bucket(filter_hot_list(sample_tasks, True), "this_week", today)
        assert a == b

    def test_view_sorts_last(self, sample_tasks, today):
        filters = TaskFilters(show_completed=False)
        view = build_task_view(sample_tasks, filters, today, TaskSort.DUE_DATE)
        assert ids(view) == [3, 1, 2, 5, 6]

    def test_view_without_sort_keeps_order(self, sample_tasks, today):
        view = build_task_view(sample_tasks, TaskFilters(), today, TaskSort.NONE)
        assert view == sample_tasks


class TestTaskActions:
    def test_complete_task(self, sample_tasks):
        result = complete_task(sample_tasks, 2, "Frau Weber", "08.01.2024, 10:00", "erledigt")
        done = result[1]
        assert done.completed is True
        assert done.completed_by == "Frau Weber"
        assert done.completion_comment == "erledigt"
        assert sample_tasks[1].completed is False

    def test_complete_without_comment(self, sample_tasks):
        result = complete_task(sample_tasks, 1, "Frau Weber", "now")
        assert result[0].completion_comment is None

    def test_add_comment_appends(self, sample_tasks):
        result = add_comment(sample_tasks, 1, "Frau Weber", "Hälfte fertig", "t1")
        result = add_comment(result, 1, "Herr Meyer", "Rest morgen", "t2")
        comments = result[0].comments
        assert [c.id for c in comments] == [1, 2]
        assert comments[1] == TaskComment(id=2, author="Herr Meyer", content="Rest morgen", timestamp="t2")
        assert sample_tasks[0].comments == ()

    def test_update_task(self, sample_tasks):
        result = update_task(sample_tasks, 6, priority="urgent", due_date="2024-02-01")
        assert result[5].priority is Priority.URGENT
        assert result[5].due_date == date(2024, 2, 1)

    def test_update_task_rejects_id(self, sample_tasks):
        with pytest.raises(ValueError):
            update_task(sample_tasks, 1, id=99)

    def test_delete_task(self, sample_tasks):
        result = delete_task(sample_tasks, 3)
        assert 3 not in ids(result)
        assert len(sample_tasks) == 6

    @pytest.mark.parametrize("action", [delete_task, lambda ts, i: complete_task(ts, i, "a", "b")])
    def test_unknown_id(self, sample_tasks, action):
        with pytest.raises(TaskNotFoundError):
            action(sample_tasks, 42)

    def test_next_task_id(self, sample_tasks):
        assert next_task_id(sample_tasks) == 7
        assert next_task_id([]) == 1

    def test_add_task(self, sample_tasks):
        result = add_task(
            sample_tasks,
            "  Vertretungsplan prüfen ",
            "Frau Weber",
            "08.01.2024, 10:00",
            priority="High",
            due_date="2024-01-10",
            hot_list=True,
            assigned_to=["Herr Meyer"],
        )
        created = result[-1]
        assert created.id == 7
        assert created.title == "Vertretungsplan prüfen"
        assert created.priority is Priority.HIGH
        assert created.due_date == date(2024, 1, 10)
        assert created.hot_list is True
        assert created.completed is False
        assert created.assigned_to == ("Herr Meyer",)
        assert created.created_by == "Frau Weber"
        assert len(sample_tasks) == 6

    def test_add_task_to_empty_list(self):
        result = add_task([], "Erste Aufgabe", "Frau Weber", "t")
        assert ids(result) == [1]
        assert result[0].priority is Priority.LOW
        assert result[0].due_date is None

    def test_add_task_rejects_blank_title(self, sample_tasks):
        with pytest.raises(ValueError):
            add_task(sample_tasks, "   ", "Frau Weber", "t")
