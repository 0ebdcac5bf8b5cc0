"""
Task operations: one method per use case.

Each operation validates its raw input against the schemas in
``task_api.schemas`` before touching storage, runs a single statement
through the repository, and maps the row to the response schema.
Storage errors propagate unchanged.
"""

from typing import Any, Optional

from pydantic import ValidationError

from task_api import schemas
from task_api.crud import TaskRepository
from task_api.exceptions import TaskValidationError


class TaskService:

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def create_task(self, payload: Any) -> schemas.Task:
        task_in = _validate(schemas.TaskCreate, payload)
        row = self.repository.create_task(task_in.title, task_in.description)
        return schemas.Task.model_validate(row)

    def list_tasks(self) -> list[schemas.Task]:
        return [schemas.Task.model_validate(row) for row in self.repository.get_tasks()]

    def get_task(self, raw_id: str) -> Optional[schemas.Task]:
        task_id = schemas.parse_task_id(raw_id)
        return _to_task(self.repository.get_task(task_id))

    def update_task_status(self, raw_id: str, payload: Any) -> Optional[schemas.Task]:
        """Change a task's status; None when no live task has that id"""
        task_id = schemas.parse_task_id(raw_id)
        update_in = _validate(schemas.TaskStatusUpdate, payload)
        return _to_task(self.repository.update_task_status(task_id, update_in.status.value))

    def soft_delete_task(self, raw_id: str) -> Optional[schemas.Task]:
        """Soft-delete a task; deleting it again reports None"""
        task_id = schemas.parse_task_id(raw_id)
        return _to_task(self.repository.soft_delete_task(task_id))


def _validate(schema, payload: Any):
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise TaskValidationError(e) from e


def _to_task(row: Optional[dict]) -> Optional[schemas.Task]:
    if row is None:
        return None
    return schemas.Task.model_validate(row)
