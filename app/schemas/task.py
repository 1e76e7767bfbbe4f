"""Pydantic schemas for the task manager."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field, field_validator

from app.schemas.base import ApiModel


def _normalize_due_date(v):
    if v == "":
        return None
    return v


def _to_naive_utc(v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class TaskCreate(ApiModel):
    """Request schema for creating a task. Omitted status/priority get defaults."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: datetime | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def empty_due_date(cls, v):
        return _normalize_due_date(v)

    @field_validator("due_date")
    @classmethod
    def naive_due_date(cls, v: datetime | None) -> datetime | None:
        return _to_naive_utc(v)


class TaskUpdate(ApiModel):
    """Request schema for updating a task. Only provided fields change."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: datetime | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def empty_due_date(cls, v):
        return _normalize_due_date(v)

    @field_validator("due_date")
    @classmethod
    def naive_due_date(cls, v: datetime | None) -> datetime | None:
        return _to_naive_utc(v)


class TaskRead(ApiModel):
    id: int
    title: str
    description: str | None
    status: str
    priority: str
    due_date: datetime | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime
