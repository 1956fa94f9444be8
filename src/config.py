from functools import lru_cache
from typing import Any, Literal
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Configuration
    API_NAME: str = "Tasksheet"
    API_SUMMARY: str = "A personal task tracker backed by a Google Sheets spreadsheet"
    TASKSHEET_VERSION: str = "v0.1.x"

    PORT: int = 10000
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    CORS_ENABLED: bool = True
    CORS_ORIGINS: list[str] = ["*"]

    # Client shell built by the front-end toolchain
    STATIC_DIR: str = "dist"

    # Row Store Configuration
    ROW_STORE_BACKEND: Literal["sheets", "memory"] = "sheets"
    SPREADSHEET_ID: str | None = None
    SHEET_NAME: str = "Sheet1"
    GOOGLE_SERVICE_ACCOUNT_KEY: str | None = None

    # Task Settings
    TASK_ID_STRATEGY: Literal["sequential", "random"] = "sequential"
    TASK_SOURCE_TAG: str = "Web"

    # Client Settings
    API_BASE_URL: str = "http://localhost:10000"

    @model_validator(mode="after")
    def validate_sheets_settings(self):
        if self.ROW_STORE_BACKEND == "sheets":
            if not self.SPREADSHEET_ID:
                raise ValueError(
                    "SPREADSHEET_ID is required when ROW_STORE_BACKEND is 'sheets'"
                )
            if not self.GOOGLE_SERVICE_ACCOUNT_KEY:
                raise ValueError(
                    "GOOGLE_SERVICE_ACCOUNT_KEY is required when ROW_STORE_BACKEND is 'sheets'"
                )
        return self

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_from_string(cls, v: Any):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
