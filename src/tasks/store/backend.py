from src.common.sheets import create_sheets_client
from src.config import Settings
from src.tasks.store.base import TaskRowStore
from src.tasks.store.memory import InMemoryRowStore
from src.tasks.store.sheets import GoogleSheetsRowStore


def get_row_store_backend(settings: Settings) -> TaskRowStore:
    if settings.ROW_STORE_BACKEND == "sheets":
        if not settings.SPREADSHEET_ID or not settings.GOOGLE_SERVICE_ACCOUNT_KEY:
            raise ValueError(
                "SPREADSHEET_ID and GOOGLE_SERVICE_ACCOUNT_KEY are required for the sheets backend"
            )
        return GoogleSheetsRowStore(
            sheets_client=create_sheets_client(settings.GOOGLE_SERVICE_ACCOUNT_KEY),
            spreadsheet_id=settings.SPREADSHEET_ID,
            sheet_name=settings.SHEET_NAME,
        )
    elif settings.ROW_STORE_BACKEND == "memory":
        return InMemoryRowStore()
    else:
        raise ValueError(f"Unsupported row store backend: {settings.ROW_STORE_BACKEND}")
