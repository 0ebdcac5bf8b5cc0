from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from task_api import schemas
from task_api.auth import require_api_key
from task_api.crud import TaskRepository
from task_api.database import get_db
from task_api.exceptions import InvalidTaskIdError, TaskValidationError
from task_api.services import TaskService

TASK_NOT_FOUND = "Task not found"
VALIDATION_ERROR = "Validation error"

router = APIRouter(dependencies=[Depends(require_api_key)], tags=["Tasks"])


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_task_service(repository: TaskRepository = Depends(get_task_repository)) -> TaskService:
    return TaskService(repository)


def invalid_id_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid id"},
    )


def validation_error_response(exc: TaskValidationError, **extra) -> JSONResponse:
    details = schemas.validation_details(exc.error.errors(include_url=False))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={**extra, "error": VALIDATION_ERROR, "details": details},
    )


def not_found_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "error": TASK_NOT_FOUND},
    )


@router.post(
    "/tasks",
    response_model=schemas.TaskCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
        payload: Any = Body(None),
        service: TaskService = Depends(get_task_service)
):
    """Create a new task"""
    try:
        task = service.create_task(payload)
    except TaskValidationError as e:
        return validation_error_response(e)
    return schemas.TaskCreated(data=task)


@router.get("/tasks", response_model=schemas.TaskListResponse)
def read_tasks(service: TaskService = Depends(get_task_service)):
    """Get all tasks, newest first"""
    return schemas.TaskListResponse(data=service.list_tasks())


@router.get("/tasks/{task_id}", response_model=schemas.TaskResponse)
def read_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get a specific task by ID"""
    try:
        task = service.get_task(task_id)
    except InvalidTaskIdError:
        return invalid_id_response()
    if task is None:
        return not_found_response()
    return schemas.TaskResponse(data=task)


@router.patch("/tasks/{task_id}", response_model=schemas.TaskResponse)
def update_task_status(
        task_id: str,
        payload: Any = Body(None),
        service: TaskService = Depends(get_task_service)
):
    """Update the status of a task"""
    try:
        task = service.update_task_status(task_id, payload)
    except InvalidTaskIdError:
        return invalid_id_response()
    except TaskValidationError as e:
        return validation_error_response(e, success=False)
    if task is None:
        return not_found_response()
    return schemas.TaskResponse(data=task)


@router.delete("/tasks/{task_id}", response_model=schemas.TaskResponse)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Soft-delete a task"""
    try:
        task = service.soft_delete_task(task_id)
    except InvalidTaskIdError:
        return invalid_id_response()
    if task is None:
        return not_found_response()
    return schemas.TaskResponse(data=task)
