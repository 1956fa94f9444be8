from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def parse_completed_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return False


class TaskModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(TaskModel):
    id: str
    title: str
    content: str = ""
    due_date: str | None = None
    completed: bool = False
    category: str = ""
    priority: str = Priority.MEDIUM.value


class CreateTaskRequest(TaskModel):
    title: str | None = None
    content: str | None = None
    due_date: str | None = None
    category: str | None = None
    priority: Priority | None = None


class UpdateTaskRequest(TaskModel):
    title: str | None = None
    content: str | None = None
    due_date: str | None = None
    completed: bool | None = None
    category: str | None = None
    priority: Priority | None = None

    @field_validator("completed", mode="before")
    def coerce_completed(cls, value: Any):
        if value is None:
            return None
        return parse_completed_flag(value)


class DeleteTaskResponse(BaseModel):
    success: bool
    message: str
