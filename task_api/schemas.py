import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from task_api.exceptions import InvalidTaskIdError

TASK_ID_PATTERN = re.compile(r"[0-9]+")
# Largest value the BIGINT primary key can hold
MAX_TASK_ID = 2 ** 63 - 1


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Task description")

    @field_validator("description")
    @classmethod
    def description_not_null(cls, v: Optional[str]) -> str:
        """Description may be omitted but not sent as null"""
        # Only runs for explicit input; the default is not validated
        if v is None:
            raise ValueError("Description must be a string")
        return v


class TaskStatusUpdate(BaseModel):
    """Schema for changing the status of a task"""
    status: TaskStatus = Field(..., description="New task status")


class Task(BaseModel):
    """Schema for returning a task"""
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("id", when_used="json")
    def serialize_id(self, value: int) -> str:
        # JSON clients may not hold 64-bit ints exactly
        return str(value)


class TaskCreated(BaseModel):
    status: bool = True
    data: Task


class TaskResponse(BaseModel):
    success: bool = True
    data: Task


class TaskListResponse(BaseModel):
    success: bool = True
    data: list[Task]


def parse_task_id(raw_id: str) -> int:
    """Parse a path id; only positive base-10 integers are accepted.

    ``"abc"``, ``"0"``, ``"-1"`` and ``"1.5"`` all raise InvalidTaskIdError.
    """
    if not isinstance(raw_id, str) or not TASK_ID_PATTERN.fullmatch(raw_id):
        raise InvalidTaskIdError(raw_id)
    task_id = int(raw_id)
    if task_id <= 0 or task_id > MAX_TASK_ID:
        raise InvalidTaskIdError(raw_id)
    return task_id


def validation_details(errors: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into per-field issues"""
    return [
        {
            "path": list(issue["loc"]),
            "code": issue["type"],
            "message": issue["msg"],
        }
        for issue in errors
    ]
