import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from src.client.api_client import TaskApiClient
from src.client.exceptions import ClientRequestError
from src.client.view import (
    ALL_CATEGORIES,
    SortOrder,
    StatusFilter,
    ViewMode,
    derive_view,
)
from src.tasks.schemas import Task

logger = logging.getLogger(__name__)

Listener = Callable[["AppState"], None]

DELETE_CONFIRMATION = "Delete this task?"
TITLE_REQUIRED_MESSAGE = "Please enter a title"


@dataclass
class AppState:
    tasks: list[Task] = field(default_factory=list)
    status_filter: StatusFilter = StatusFilter.ALL
    sort: SortOrder = SortOrder.DATE
    category: str = ALL_CATEGORIES
    view: ViewMode = ViewMode.REGISTER
    editing_task_id: str | None = None
    is_loading: bool = False

    def find_task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)

    def replace_task(self, updated: Task) -> None:
        for index, task in enumerate(self.tasks):
            if task.id == updated.id:
                self.tasks[index] = updated
                return

    def visible_tasks(self, today: date | None = None) -> list[Task]:
        return derive_view(
            self.tasks,
            view=self.view,
            status_filter=self.status_filter,
            sort=self.sort,
            category=self.category,
            today=today,
        )


def _log_notification(message: str) -> None:
    logger.warning(message)


class TodoApp:
    """Owns the client-side task cache and every change made to it.

    The cache is only ever refreshed from server responses. Request
    failures are logged and reported through `notify`; they never escape
    these methods.
    """

    def __init__(
        self,
        *,
        api_client: TaskApiClient,
        confirm: Callable[[str], bool],
        notify: Callable[[str], None] = _log_notification,
        state: AppState | None = None,
    ):
        self.api_client = api_client
        self.confirm = confirm
        self.notify = notify
        self.state = state or AppState()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def _report(self, action: str, error: ClientRequestError) -> None:
        logger.error(f"{action} failed: {error}")
        self.notify(f"An error occurred: {error}")

    async def load(self) -> None:
        self.state.is_loading = True
        try:
            self.state.tasks = await self.api_client.list_tasks()
        except ClientRequestError as e:
            self._report("Loading tasks", e)
            self.state.tasks = []
        finally:
            self.state.is_loading = False
        self._changed()

    async def submit(
        self,
        title: str,
        content: str = "",
        due_date: str | None = None,
        category: str = "",
        priority: str = "medium",
    ) -> bool:
        """Create a task, or update the one being edited.

        Returns False when nothing was saved.
        """
        title = title.strip()
        if not title:
            self.notify(TITLE_REQUIRED_MESSAGE)
            return False

        fields: dict[str, Any] = {
            "title": title,
            "content": content.strip(),
            "dueDate": due_date or None,
            "category": category,
            "priority": priority,
        }

        editing_task_id = self.state.editing_task_id
        try:
            if editing_task_id:
                updated = await self.api_client.update_task(editing_task_id, fields)
                self.state.replace_task(updated)
                self.state.editing_task_id = None
            else:
                created = await self.api_client.create_task(fields)
                self.state.tasks.append(created)
        except ClientRequestError as e:
            self._report("Saving task", e)
            return False

        self._changed()
        return True

    def start_edit(self, task_id: str) -> Task | None:
        task = self.state.find_task(task_id)
        if task is None:
            return None
        self.state.editing_task_id = task_id
        self._changed()
        return task

    def cancel_edit(self) -> None:
        self.state.editing_task_id = None
        self._changed()

    async def toggle(self, task_id: str) -> None:
        task = self.state.find_task(task_id)
        if task is None:
            return

        try:
            updated = await self.api_client.update_task(
                task_id, {"completed": not task.completed}
            )
        except ClientRequestError as e:
            self._report("Toggling task", e)
            return

        self.state.replace_task(updated)
        self._changed()

    async def delete(self, task_id: str) -> bool:
        if not self.confirm(DELETE_CONFIRMATION):
            return False

        try:
            await self.api_client.delete_task(task_id)
        except ClientRequestError as e:
            self._report("Deleting task", e)
            return False

        self.state.tasks = [task for task in self.state.tasks if task.id != task_id]
        self._changed()
        return True

    def set_filter(self, status_filter: StatusFilter | str) -> None:
        self.state.status_filter = StatusFilter(status_filter)
        self._changed()

    def set_sort(self, sort: SortOrder | str) -> None:
        self.state.sort = SortOrder(sort)
        self._changed()

    def set_category(self, category: str) -> None:
        self.state.category = category
        self._changed()

    def set_view(self, view: ViewMode | str) -> None:
        self.state.view = ViewMode(view)
        self._changed()
