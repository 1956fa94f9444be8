from copy import deepcopy
from typing import Any

from src.tasks.rows import HEADER_ROW
from src.tasks.store.base import TaskRowStore


class InMemoryRowStore(TaskRowStore):
    def __init__(self, rows: list[list[Any]] | None = None):
        self.rows: list[list[Any]] = (
            deepcopy(rows) if rows is not None else [list(HEADER_ROW)]
        )

    def read_rows(self) -> list[list[Any]]:
        return deepcopy(self.rows)

    def append_row(self, row: list[str]) -> None:
        self.rows.append(list(row))

    def update_row(self, row_number: int, row: list[str]) -> None:
        self.rows[row_number - 1] = list(row)

    def delete_row(self, row_index: int) -> None:
        del self.rows[row_index]
