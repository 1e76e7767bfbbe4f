"""Pydantic schemas for snippets and tags."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from app.schemas.base import ApiModel

TagName = Annotated[str, Field(min_length=1, max_length=64)]


class SnippetCreate(ApiModel):
    """Core snippet fields. Tag names travel separately."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    code: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1, max_length=64)


class SnippetUpdate(SnippetCreate):
    """PUT replaces every core field, same shape as create."""


class SnippetPayload(SnippetCreate):
    """HTTP body for create/update: core fields plus an optional tag list."""

    tags: list[TagName] | None = None

    def split(
        self, model: type[SnippetCreate] = SnippetCreate
    ) -> tuple[SnippetCreate, list[str]]:
        """Separate the validated core fields from the tag names."""
        core = model.model_validate(self.model_dump(exclude={"tags"}))
        return core, list(self.tags or [])


class SnippetRead(ApiModel):
    """Response schema for a snippet with its tag names."""

    id: int
    title: str
    description: str | None = None
    code: str
    language: str
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list)


class TagRead(ApiModel):
    """A tag with the number of snippets referencing it."""

    id: int
    name: str
    count: int
