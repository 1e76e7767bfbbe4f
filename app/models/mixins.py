"""Shared column mixins and the UTC clock used for timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Current time as naive UTC, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CreatedAtMixin:
    created_at = Column(DateTime, nullable=False, default=utcnow)


class TimestampMixin(CreatedAtMixin):
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
