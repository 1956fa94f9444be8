from functools import wraps
import logging
from typing import Any, Callable, TypeVar

from src.common.exceptions import RowStoreError, UpstreamStoreException

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def upstream_store_errors(message: str) -> Callable[[F], F]:
    """Turn row store failures into an UpstreamStoreException carrying `message`.

    The raw store error is logged and chained, never shown to callers.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            try:
                return func(*args, **kwargs)
            except RowStoreError as e:
                logger.error(f"{message}: {e}")
                raise UpstreamStoreException(message) from e

        return wrapper  # type: ignore

    return decorator
