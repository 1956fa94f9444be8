import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.common.exceptions import (
    ResourceNotFoundException,
    UpstreamStoreException,
    ValidationException,
    internal_error_response,
    resource_not_found_handler,
    unexpected_exception_handler,
    upstream_store_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from src.config import get_settings
from src.healthcheck.router import router as health_router
from src.shell.router import router as shell_router
from src.tasks.router import router as tasks_router
from src.tasks.store.backend import get_row_store_backend

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A row store that cannot be initialised aborts startup
    app.state.row_store = get_row_store_backend(settings)
    logger.info(f"Row store connected ({settings.ROW_STORE_BACKEND})")
    yield


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    responses={**internal_error_response},
    version=settings.TASKSHEET_VERSION,
)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ValidationException)(validation_error_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(UpstreamStoreException)(upstream_store_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(tasks_router)
# Catch-all shell route, must stay last
app.include_router(shell_router)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
