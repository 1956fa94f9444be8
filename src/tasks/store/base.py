from abc import ABC, abstractmethod
from typing import Any


class TaskRowStore(ABC):
    """Positional row store holding one task per row below a header row."""

    @abstractmethod
    def read_rows(self) -> list[list[Any]]:
        """Return every row of the task range, header included."""
        pass

    @abstractmethod
    def append_row(self, row: list[str]) -> None:
        pass

    @abstractmethod
    def update_row(self, row_number: int, row: list[str]) -> None:
        """Overwrite the 1-based sheet row `row_number`."""
        pass

    @abstractmethod
    def delete_row(self, row_index: int) -> None:
        """Remove the row at 0-based `row_index` of `read_rows()`."""
        pass

    def ping(self) -> None:
        self.read_rows()
