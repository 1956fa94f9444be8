from datetime import date
from html import escape
from typing import Callable, Sequence

from src.client.state import AppState, TodoApp
from src.client.view import format_due_date
from src.tasks.schemas import Task

CATEGORY_EMOJIS = {
    "work": "💼",
    "study": "📖",
    "shopping": "🛒",
}
DEFAULT_CATEGORY_EMOJI = "📌"

CATEGORY_LABELS = {
    "work": "Work",
    "study": "Study",
    "shopping": "Shopping",
}

PRIORITY_LABELS = {
    "high": "High",
    "medium": "Medium",
    "low": "Low",
}

EMPTY_STATE = '<p class="empty-state">No tasks yet</p>'


def render_task(task: Task, today: date | None = None) -> str:
    due = format_due_date(task.due_date, today)
    emoji = CATEGORY_EMOJIS.get(task.category, DEFAULT_CATEGORY_EMOJI)
    category_label = CATEGORY_LABELS.get(task.category, "")
    priority_label = PRIORITY_LABELS.get(task.priority, "")
    task_id = escape(task.id)

    content = (
        f'<div class="task-body">{escape(task.content)}</div>' if task.content else ""
    )
    due_html = (
        f'<span class="{escape(due.css_class)}">{escape(due.text)}</span>'
        if due
        else ""
    )

    return (
        f'<div class="task-card{" completed" if task.completed else ""}" data-task-id="{task_id}">'
        f'<input type="checkbox" data-action="toggle"{" checked" if task.completed else ""}>'
        '<div class="task-content">'
        f'<div class="task-title">{escape(task.title)}</div>'
        f"{content}"
        '<div class="task-meta">'
        f'<span class="category {escape(task.category)}">{emoji} {escape(category_label)}</span>'
        f'<span class="priority priority-{escape(task.priority)}">{escape(priority_label)}</span>'
        f"{due_html}"
        "</div>"
        "</div>"
        '<div class="task-actions">'
        '<button data-action="edit">Edit</button>'
        '<button data-action="delete">Delete</button>'
        "</div>"
        "</div>"
    )


def render_task_list(tasks: Sequence[Task], today: date | None = None) -> str:
    """Full list fragment for already filtered and sorted tasks."""
    if not tasks:
        return EMPTY_STATE
    return "".join(render_task(task, today) for task in tasks)


class TaskListRenderer:
    """Re-renders the whole task list into `sink` whenever the app changes."""

    def __init__(
        self,
        app: TodoApp,
        sink: Callable[[str], None],
        today: Callable[[], date] = date.today,
    ):
        self.sink = sink
        self.today = today
        self.html = ""
        self._unsubscribe = app.subscribe(self.render)

    def render(self, state: AppState) -> str:
        today = self.today()
        self.html = render_task_list(state.visible_tasks(today), today)
        self.sink(self.html)
        return self.html

    def close(self) -> None:
        self._unsubscribe()
