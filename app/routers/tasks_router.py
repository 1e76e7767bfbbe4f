"""Tasks API: CRUD for the task manager."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import InputValidationError, InternalError
from app.routers.utils.dependencies import get_task_service
from app.schemas.common import SuccessResponse
from app.schemas.task import TaskCreate, TaskRead, TaskUpdate
from app.services.task_service import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[TaskRead])
def list_tasks(
    svc: TaskService = Depends(get_task_service),
) -> List[TaskRead]:
    """List all tasks, most recently updated first."""
    try:
        tasks = svc.get_tasks()
    except SQLAlchemyError as e:
        raise InternalError("Failed to fetch tasks") from e
    return [TaskRead.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: int,
    svc: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Get a task by ID."""
    return TaskRead.model_validate(svc.get_task(task_id))


@router.post("", response_model=TaskRead, status_code=201)
def create_task(
    data: TaskCreate,
    svc: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Create a task."""
    try:
        task = svc.create_task(data)
    except SQLAlchemyError as e:
        raise InputValidationError("Failed to create task") from e
    return TaskRead.model_validate(task)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    data: TaskUpdate,
    svc: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Update a task."""
    try:
        task = svc.update_task(task_id, data)
    except SQLAlchemyError as e:
        raise InputValidationError("Failed to update task") from e
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", response_model=SuccessResponse)
def delete_task(
    task_id: int,
    svc: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    """Delete a task."""
    try:
        svc.delete_task(task_id)
    except SQLAlchemyError as e:
        raise InputValidationError("Failed to delete task") from e
    return SuccessResponse()
