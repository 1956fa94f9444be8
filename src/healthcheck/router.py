import logging
from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.common.sheets import get_row_store
from src.config import Settings, get_settings
from src.tasks.store.base import TaskRowStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "row_store": {"status": "ok", "backend": "sheets"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "row_store": {
                            "status": "error",
                            "backend": "sheets",
                            "message": "Row store unavailable",
                        },
                    }
                }
            },
        },
    },
)
def healthcheck(
    settings: Settings = Depends(get_settings),
    row_store: TaskRowStore = Depends(get_row_store),
) -> JSONResponse:
    health_status: dict[str, Any] = {
        "api": {"status": "ok"},
        "row_store": {"status": "ok", "backend": settings.ROW_STORE_BACKEND},
    }

    try:
        row_store.ping()
    except Exception as e:
        logger.error(f"Row store healthcheck failed: {e}")
        health_status["row_store"].update(
            {"status": "error", "message": "Row store unavailable"}
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
