from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Sequence

from src.tasks.schemas import Priority, Task

REGISTER_WINDOW_DAYS = 7
ALL_CATEGORIES = "all"

PRIORITY_RANK = {
    Priority.HIGH.value: 0,
    Priority.MEDIUM.value: 1,
    Priority.LOW.value: 2,
}
UNKNOWN_PRIORITY_RANK = len(PRIORITY_RANK)


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortOrder(str, Enum):
    DATE = "date"
    PRIORITY = "priority"


class ViewMode(str, Enum):
    REGISTER = "register"
    LIST = "list"


@dataclass(frozen=True)
class DueDateLabel:
    text: str
    css_class: str


def parse_due_date(value: str | None) -> datetime | None:
    """Parse an ISO-ish due date into a naive local datetime.

    Unparseable values are treated like a missing due date.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def days_until(due: datetime, today: date) -> int:
    """Whole days between today's midnight and the due date's midnight."""
    return (due.date() - today).days


def _within_register_window(task: Task, today: date) -> bool:
    due = parse_due_date(task.due_date)
    if due is None:
        return False
    return -REGISTER_WINDOW_DAYS <= days_until(due, today) <= REGISTER_WINDOW_DAYS


def _priority_key(task: Task) -> int:
    return PRIORITY_RANK.get(task.priority, UNKNOWN_PRIORITY_RANK)


def _due_date_key(task: Task) -> tuple[int, datetime]:
    due = parse_due_date(task.due_date)
    if due is None:
        return (1, datetime.max)
    return (0, due)


def derive_view(
    tasks: Sequence[Task],
    *,
    view: ViewMode = ViewMode.LIST,
    status_filter: StatusFilter = StatusFilter.ALL,
    sort: SortOrder = SortOrder.DATE,
    category: str = ALL_CATEGORIES,
    today: date | None = None,
) -> list[Task]:
    """Visible tasks for the current selections.

    Steps run in a fixed order: the view pre-filter (due date window for
    the register view, category for the list view), then the completion
    filter, then a stable sort.
    """
    today = today or date.today()
    visible = list(tasks)

    if view == ViewMode.REGISTER:
        visible = [task for task in visible if _within_register_window(task, today)]
    elif category != ALL_CATEGORIES:
        visible = [task for task in visible if task.category == category]

    if status_filter == StatusFilter.ACTIVE:
        visible = [task for task in visible if not task.completed]
    elif status_filter == StatusFilter.COMPLETED:
        visible = [task for task in visible if task.completed]

    if sort == SortOrder.PRIORITY:
        visible.sort(key=_priority_key)
    else:
        visible.sort(key=_due_date_key)

    return visible


def format_absolute_date(value: date) -> str:
    return f"{value.year}/{value.month}/{value.day}"


def format_due_date(
    due_date: str | None, today: date | None = None
) -> DueDateLabel | None:
    due = parse_due_date(due_date)
    if due is None:
        return None

    diff = days_until(due, today or date.today())

    if diff < 0:
        return DueDateLabel("overdue", "overdue")
    if diff == 0:
        return DueDateLabel("today", "today")
    if diff == 1:
        return DueDateLabel("tomorrow", "soon")
    if diff <= REGISTER_WINDOW_DAYS:
        return DueDateLabel(f"in {diff} days", "upcoming")

    return DueDateLabel(format_absolute_date(due.date()), "")
