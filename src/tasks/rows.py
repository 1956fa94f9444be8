from dataclasses import dataclass
from typing import Any, Sequence

from src.tasks.schemas import Priority, Task, parse_completed_flag

HEADER_ROW = [
    "TaskId",
    "Title",
    "Content",
    "DueDate",
    "CompletedFlag",
    "SourceTag",
    "ExternalEventId",
    "Category",
    "Priority",
]
COLUMN_COUNT = len(HEADER_ROW)
FIRST_COLUMN = "A"
LAST_COLUMN = "I"


@dataclass
class TaskRow:
    """One spreadsheet row, column for column."""

    task_id: str
    title: str
    content: str = ""
    due_date: str = ""
    completed_flag: str = "false"
    source_tag: str = ""
    external_event_id: str = ""
    category: str = ""
    priority: str = Priority.MEDIUM.value

    def to_cells(self) -> list[str]:
        return [
            self.task_id,
            self.title,
            self.content,
            self.due_date,
            self.completed_flag,
            self.source_tag,
            self.external_event_id,
            self.category,
            self.priority,
        ]

    def to_task(self) -> Task:
        return Task(
            id=self.task_id,
            title=self.title,
            content=self.content,
            due_date=self.due_date or None,
            completed=parse_completed_flag(self.completed_flag),
            category=self.category,
            priority=self.priority or Priority.MEDIUM.value,
        )


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    value = row[index]
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def decode_row(row: Sequence[Any]) -> TaskRow:
    """Map a positional row (possibly trimmed of trailing cells) to a TaskRow."""
    return TaskRow(
        task_id=_cell(row, 0).strip(),
        title=_cell(row, 1),
        content=_cell(row, 2),
        due_date=_cell(row, 3),
        completed_flag="true" if parse_completed_flag(_cell(row, 4)) else "false",
        source_tag=_cell(row, 5),
        external_event_id=_cell(row, 6),
        category=_cell(row, 7),
        priority=_cell(row, 8) or Priority.MEDIUM.value,
    )


def decode_task(row: Sequence[Any]) -> Task:
    return decode_row(row).to_task()


def is_blank_row(row: Sequence[Any]) -> bool:
    return not any(_cell(row, i).strip() for i in range(COLUMN_COUNT))


def _quote_sheet_name(sheet_name: str) -> str:
    if sheet_name.isalnum():
        return sheet_name
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'"


def row_range(sheet_name: str, row_number: int | None = None) -> str:
    """A1 notation for the whole task range, or for a single 1-based row."""
    sheet = _quote_sheet_name(sheet_name)
    if row_number is None:
        return f"{sheet}!{FIRST_COLUMN}:{LAST_COLUMN}"
    return f"{sheet}!{FIRST_COLUMN}{row_number}:{LAST_COLUMN}{row_number}"
