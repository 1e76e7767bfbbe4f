"""Task manager models."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.constants.tasks import TaskPriority, TaskStatus
from app.db import Base
from app.models.mixins import CreatedAtMixin, TimestampMixin


class Task(Base, TimestampMixin):
    """A task. status and priority are stored as free strings."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default=TaskStatus.PENDING.value)
    priority = Column(String(32), nullable=False, default=TaskPriority.MEDIUM.value)
    due_date = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)


class TaskCategory(Base, CreatedAtMixin):
    """Reserved for task grouping; no endpoints read or write it yet."""

    __tablename__ = "task_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), unique=True, nullable=False)
    color = Column(String(16), nullable=True)


class TaskDependency(Base, CreatedAtMixin):
    """Reserved for task ordering; no endpoints read or write it yet."""

    __tablename__ = "task_dependencies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(
        Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False
    )
    depends_on_task_id = Column(
        Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False
    )
