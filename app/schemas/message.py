"""Pydantic schemas for contact form messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.base import ApiModel


class MessageCreate(ApiModel):
    """Request schema for a contact form submission."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=1000)


class MessageRead(ApiModel):
    id: int
    name: str
    email: str
    message: str
    created_at: datetime
