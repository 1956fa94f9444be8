import logging
import threading
from typing import Any
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError  # type: ignore

from src.common.exceptions import RowStoreError
from src.common.sheets import SheetsClient
from src.tasks.rows import row_range
from src.tasks.store.base import TaskRowStore

logger = logging.getLogger(__name__)

STORE_ERRORS = (HttpError, GoogleAuthError, OSError)


class GoogleSheetsRowStore(TaskRowStore):
    def __init__(
        self, *, sheets_client: SheetsClient, spreadsheet_id: str, sheet_name: str
    ):
        self.client = sheets_client
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        # The underlying httplib2 transport is not thread-safe
        self._lock = threading.Lock()

    def _execute(self, request: Any) -> Any:
        with self._lock:
            return request.execute()

    def read_rows(self) -> list[list[Any]]:
        try:
            response = self._execute(
                self.client.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=row_range(self.sheet_name),
                )
            )
        except STORE_ERRORS as e:
            raise RowStoreError(f"Failed to read rows: {e}") from e
        return response.get("values", [])

    def append_row(self, row: list[str]) -> None:
        try:
            self._execute(
                self.client.spreadsheets()
                .values()
                .append(
                    spreadsheetId=self.spreadsheet_id,
                    range=row_range(self.sheet_name),
                    valueInputOption="RAW",
                    body={"values": [row]},
                )
            )
        except STORE_ERRORS as e:
            raise RowStoreError(f"Failed to append row: {e}") from e

    def update_row(self, row_number: int, row: list[str]) -> None:
        try:
            self._execute(
                self.client.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.spreadsheet_id,
                    range=row_range(self.sheet_name, row_number),
                    valueInputOption="RAW",
                    body={"values": [row]},
                )
            )
        except STORE_ERRORS as e:
            raise RowStoreError(f"Failed to update row {row_number}: {e}") from e

    def _get_sheet_id(self) -> int:
        try:
            spreadsheet = self._execute(
                self.client.spreadsheets().get(
                    spreadsheetId=self.spreadsheet_id, fields="sheets.properties"
                )
            )
        except STORE_ERRORS as e:
            raise RowStoreError(f"Failed to read spreadsheet metadata: {e}") from e

        for sheet in spreadsheet.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == self.sheet_name:
                return properties["sheetId"]

        raise RowStoreError(f"Sheet '{self.sheet_name}' not found in spreadsheet")

    def delete_row(self, row_index: int) -> None:
        sheet_id = self._get_sheet_id()
        try:
            self._execute(
                self.client.spreadsheets().batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={
                        "requests": [
                            {
                                "deleteDimension": {
                                    "range": {
                                        "sheetId": sheet_id,
                                        "dimension": "ROWS",
                                        "startIndex": row_index,
                                        "endIndex": row_index + 1,
                                    }
                                }
                            }
                        ]
                    },
                )
            )
        except STORE_ERRORS as e:
            raise RowStoreError(f"Failed to delete row {row_index}: {e}") from e

        logger.debug(f"Deleted row {row_index} from sheet '{self.sheet_name}'")
