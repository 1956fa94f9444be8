from fastapi import APIRouter, Depends, status

from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    validation_error_response,
)
from src.tasks.dependencies import get_task_service
from src.tasks.schemas import (
    CreateTaskRequest,
    DeleteTaskResponse,
    Task,
    UpdateTaskRequest,
)
from src.tasks.service import TaskService


router = APIRouter(
    prefix="/api/tasks",
    tags=["Tasks"],
)


@router.get("")
def list_tasks(task_service: TaskService = Depends(get_task_service)) -> list[Task]:
    return task_service.list_tasks()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={**validation_error_response},
)
def create_task(
    task_input: CreateTaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.create_task(task_input)


@router.put(
    "/{task_id}",
    responses={
        **resource_not_found_response(ResourceType.TASK),
        **validation_error_response,
    },
)
def update_task(
    task_id: str,
    task_input: UpdateTaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.update_task(task_id, task_input)


@router.delete(
    "/{task_id}",
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def delete_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> DeleteTaskResponse:
    return task_service.delete_task(task_id)
