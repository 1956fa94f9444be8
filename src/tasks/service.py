import logging
from typing import Any

from src.common.exceptions import (
    ResourceNotFoundException,
    ResourceType,
    RowStoreError,
    ValidationException,
)
from src.decorators import upstream_store_errors
from src.tasks.id_allocator import TaskIdAllocator
from src.tasks.rows import TaskRow, decode_row, is_blank_row
from src.tasks.schemas import (
    CreateTaskRequest,
    DeleteTaskResponse,
    Priority,
    Task,
    UpdateTaskRequest,
)
from src.tasks.store.base import TaskRowStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(
        self,
        *,
        row_store: TaskRowStore,
        id_allocator: TaskIdAllocator,
        source_tag: str = "Web",
    ) -> None:
        self.row_store = row_store
        self.id_allocator = id_allocator
        self.source_tag = source_tag

    def _find_row(self, rows: list[list[Any]], task_id: str) -> int:
        """Index of the first row after the header holding `task_id`."""
        for index, row in enumerate(rows):
            if index == 0:
                continue
            if decode_row(row).task_id == task_id:
                return index
        raise ResourceNotFoundException(ResourceType.TASK, task_id)

    def _allocate_id(self) -> str:
        if not self.id_allocator.needs_existing_ids:
            return self.id_allocator.next_id([])

        try:
            rows = self.row_store.read_rows()
        except RowStoreError:
            logger.exception("Failed to read existing task ids, using fallback id")
            return self.id_allocator.fallback_id()

        existing_ids = [decode_row(row).task_id for row in rows[1:]]
        return self.id_allocator.next_id(existing_ids)

    @upstream_store_errors("Failed to load tasks")
    def list_tasks(self) -> list[Task]:
        rows = self.row_store.read_rows()
        return [decode_row(row).to_task() for row in rows[1:] if not is_blank_row(row)]

    @upstream_store_errors("Failed to add task")
    def create_task(self, task_input: CreateTaskRequest) -> Task:
        if not task_input.title or not task_input.title.strip():
            raise ValidationException("title is required")

        task_row = TaskRow(
            task_id=self._allocate_id(),
            title=task_input.title,
            content=task_input.content or "",
            due_date=task_input.due_date or "",
            completed_flag="false",
            source_tag=self.source_tag,
            external_event_id="",
            category=task_input.category or "",
            priority=(task_input.priority or Priority.MEDIUM).value,
        )

        self.row_store.append_row(task_row.to_cells())
        logger.info(f"Created task '{task_row.task_id}'")

        return task_row.to_task()

    @upstream_store_errors("Failed to update task")
    def update_task(self, task_id: str, task_input: UpdateTaskRequest) -> Task:
        if task_input.title is not None and not task_input.title.strip():
            raise ValidationException("title is required")

        rows = self.row_store.read_rows()
        index = self._find_row(rows, task_id)

        current = decode_row(rows[index])
        updated = TaskRow(
            task_id=task_id,
            title=task_input.title if task_input.title is not None else current.title,
            content=(
                task_input.content
                if task_input.content is not None
                else current.content
            ),
            due_date=(
                task_input.due_date
                if task_input.due_date is not None
                else current.due_date
            ),
            completed_flag=(
                ("true" if task_input.completed else "false")
                if task_input.completed is not None
                else current.completed_flag
            ),
            source_tag=current.source_tag,
            external_event_id=current.external_event_id,
            category=(
                task_input.category
                if task_input.category is not None
                else current.category
            ),
            priority=(
                task_input.priority.value
                if task_input.priority is not None
                else current.priority
            ),
        )

        # Sheet rows are 1-based, so the header at index 0 is row 1
        self.row_store.update_row(index + 1, updated.to_cells())
        logger.info(f"Updated task '{task_id}'")

        return updated.to_task()

    @upstream_store_errors("Failed to delete task")
    def delete_task(self, task_id: str) -> DeleteTaskResponse:
        rows = self.row_store.read_rows()
        index = self._find_row(rows, task_id)

        self.row_store.delete_row(index)
        logger.info(f"Deleted task '{task_id}'")

        return DeleteTaskResponse(success=True, message=f"Task '{task_id}' deleted")
