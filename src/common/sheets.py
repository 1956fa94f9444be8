import json
from fastapi import Request
from google.oauth2 import service_account
from googleapiclient.discovery import Resource, build  # type: ignore

from src.tasks.store.base import TaskRowStore


SheetsClient = Resource

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def create_sheets_client(service_account_key: str) -> SheetsClient:
    try:
        credentials = service_account.Credentials.from_service_account_info(  # type: ignore
            json.loads(service_account_key), scopes=SHEETS_SCOPES
        )
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)
    except Exception as e:
        raise RuntimeError("Failed to connect to Google Sheets") from e


def get_row_store(request: Request) -> TaskRowStore:
    return request.app.state.row_store
