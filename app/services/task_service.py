"""Service for task CRUD."""

from __future__ import annotations

from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.constants.tasks import TaskPriority, TaskStatus
from app.core.errors import NotFoundError
from app.models.mixins import utcnow
from app.models.task import Task
from app.schemas.task import TaskCreate, TaskUpdate


class TaskService:
    """Manages tasks for the task manager."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_tasks(self) -> List[Task]:
        """List all tasks, most recently updated first."""
        return self.db.query(Task).order_by(Task.updated_at.desc(), Task.id.desc()).all()

    def get_task(self, task_id: int) -> Task:
        """Fetch a task by ID. Raises NotFoundError if absent."""
        task = self.db.query(Task).filter(Task.id == task_id).first()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def create_task(self, data: TaskCreate) -> Task:
        """Create a task; status and priority default to pending and medium."""
        status = data.status or TaskStatus.PENDING.value
        task = Task(
            title=data.title,
            description=data.description,
            status=status,
            priority=data.priority or TaskPriority.MEDIUM.value,
            due_date=data.due_date,
            completed_at=utcnow() if status == TaskStatus.COMPLETED else None,
        )
        self._commit(task)
        return task

    def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        """
        Update the fields present in ``data``.

        completed_at is stamped when the status moves to completed and
        cleared when it moves away from it.
        """
        task = self.get_task(task_id)
        changes = data.model_dump(exclude_unset=True)
        for field in ("title", "status", "priority"):
            if changes.get(field) is None:
                changes.pop(field, None)

        previous_status = task.status
        for field, value in changes.items():
            setattr(task, field, value)

        if task.status == TaskStatus.COMPLETED and previous_status != TaskStatus.COMPLETED:
            task.completed_at = utcnow()
        elif task.status != TaskStatus.COMPLETED:
            task.completed_at = None
        task.updated_at = utcnow()

        self._commit(task)
        return task

    def delete_task(self, task_id: int) -> None:
        """Delete a task. Raises NotFoundError if absent."""
        task = self.get_task(task_id)
        self.db.delete(task)
        self._commit()

    def _commit(self, task: Task | None = None) -> None:
        try:
            if task is not None:
                self.db.add(task)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        if task is not None and task in self.db:
            self.db.refresh(task)
