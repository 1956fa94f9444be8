from fastapi import Depends

from src.common.sheets import get_row_store
from src.config import Settings, get_settings
from src.tasks.id_allocator import get_id_allocator
from src.tasks.service import TaskService
from src.tasks.store.base import TaskRowStore


def get_task_service(
    row_store: TaskRowStore = Depends(get_row_store),
    settings: Settings = Depends(get_settings),
) -> TaskService:
    return TaskService(
        row_store=row_store,
        id_allocator=get_id_allocator(settings.TASK_ID_STRATEGY),
        source_tag=settings.TASK_SOURCE_TAG,
    )
