from datetime import date
import pytest

from src.client.view import (
    DueDateLabel,
    SortOrder,
    StatusFilter,
    ViewMode,
    derive_view,
    format_due_date,
    parse_due_date,
)
from src.tasks.schemas import Task

TODAY = date(2024, 6, 15)


def make_task(task_id: str, **kwargs) -> Task:
    return Task(id=task_id, title=f"Task {task_id}", **kwargs)


@pytest.fixture
def tasks() -> list[Task]:
    return [
        make_task("001", due_date="2024-06-20", priority="low", category="work"),
        make_task("002", priority="high", completed=True, category="study"),
        make_task("003", due_date="2024-06-10T08:00", priority="medium", category="work"),
        make_task("004", due_date="2024-07-30", priority="high", completed=True),
        make_task("005", due_date="2024-06-15T23:59", priority="low", category="shopping"),
        make_task("006", priority="medium", category="work"),
    ]


def ids(tasks: list[Task]) -> list[str]:
    return [task.id for task in tasks]


def test_parse_due_date() -> None:
    assert parse_due_date(None) is None
    assert parse_due_date("") is None
    assert parse_due_date("not a date") is None
    assert parse_due_date("2024-06-15").date() == TODAY  # type: ignore
    assert parse_due_date("2024-06-15T10:30").hour == 10  # type: ignore


def test_active_filter_keeps_only_incomplete(tasks: list[Task]) -> None:
    visible = derive_view(tasks, status_filter=StatusFilter.ACTIVE, today=TODAY)

    assert sorted(ids(visible)) == ["001", "003", "005", "006"]
    assert all(not task.completed for task in visible)


def test_completed_filter_keeps_only_completed(tasks: list[Task]) -> None:
    visible = derive_view(tasks, status_filter=StatusFilter.COMPLETED, today=TODAY)

    assert sorted(ids(visible)) == ["002", "004"]


def test_all_filter_keeps_everything(tasks: list[Task]) -> None:
    assert len(derive_view(tasks, today=TODAY)) == len(tasks)


def test_date_sort_puts_undated_last(tasks: list[Task]) -> None:
    visible = derive_view(tasks, sort=SortOrder.DATE, today=TODAY)

    assert ids(visible) == ["003", "005", "001", "004", "002", "006"]


def test_priority_sort_is_stable(tasks: list[Task]) -> None:
    visible = derive_view(tasks, sort=SortOrder.PRIORITY, today=TODAY)

    assert ids(visible) == ["002", "004", "003", "006", "001", "005"]


def test_priority_sort_puts_unknown_priority_last() -> None:
    visible = derive_view(
        [make_task("a", priority="urgent"), make_task("b", priority="low")],
        sort=SortOrder.PRIORITY,
        today=TODAY,
    )

    assert ids(visible) == ["b", "a"]


def test_register_view_keeps_seven_day_window() -> None:
    tasks = [
        make_task("past-8", due_date="2024-06-07"),
        make_task("past-7", due_date="2024-06-08T09:00"),
        make_task("today", due_date="2024-06-15"),
        make_task("future-7", due_date="2024-06-22T23:00"),
        make_task("future-8", due_date="2024-06-23"),
        make_task("undated"),
    ]

    visible = derive_view(tasks, view=ViewMode.REGISTER, today=TODAY)

    assert ids(visible) == ["past-7", "today", "future-7"]


def test_register_view_ignores_category(tasks: list[Task]) -> None:
    visible = derive_view(tasks, view=ViewMode.REGISTER, category="study", today=TODAY)

    assert ids(visible) == ["003", "005", "001"]


def test_list_view_filters_category(tasks: list[Task]) -> None:
    visible = derive_view(tasks, view=ViewMode.LIST, category="work", today=TODAY)

    assert ids(visible) == ["003", "001", "006"]


def test_window_runs_before_completion_filter() -> None:
    tasks = [
        make_task("old-active", due_date="2024-05-01"),
        make_task("near-done", due_date="2024-06-16", completed=True),
        make_task("near-active", due_date="2024-06-17"),
    ]

    visible = derive_view(
        tasks,
        view=ViewMode.REGISTER,
        status_filter=StatusFilter.ACTIVE,
        today=TODAY,
    )

    assert ids(visible) == ["near-active"]


def test_derive_view_does_not_mutate_input(tasks: list[Task]) -> None:
    original = ids(tasks)

    derive_view(tasks, sort=SortOrder.PRIORITY, today=TODAY)

    assert ids(tasks) == original


@pytest.mark.parametrize(
    ("due_date", "expected"),
    [
        ("2024-06-15", DueDateLabel("today", "today")),
        ("2024-06-15T23:30", DueDateLabel("today", "today")),
        ("2024-06-16", DueDateLabel("tomorrow", "soon")),
        ("2024-06-20", DueDateLabel("in 5 days", "upcoming")),
        ("2024-06-22", DueDateLabel("in 7 days", "upcoming")),
        ("2024-06-14", DueDateLabel("overdue", "overdue")),
        ("2024-07-15", DueDateLabel("2024/7/15", "")),
    ],
)
def test_format_due_date(due_date: str, expected: DueDateLabel) -> None:
    assert format_due_date(due_date, TODAY) == expected


def test_format_due_date_without_date() -> None:
    assert format_due_date(None, TODAY) is None
    assert format_due_date("", TODAY) is None
