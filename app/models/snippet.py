"""Code snippet, tag and snippet-tag join models."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import CreatedAtMixin, TimestampMixin


class Snippet(Base, TimestampMixin):
    """A code snippet. Tags are attached through SnippetTag rows."""

    __tablename__ = "snippets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    code = Column(Text, nullable=False)
    language = Column(String(64), nullable=False)

    snippet_tags = relationship("SnippetTag", back_populates="snippet")


class Tag(Base, CreatedAtMixin):
    """Tag names are exact and case-sensitive. Orphaned tags are kept."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), unique=True, nullable=False, index=True)

    snippet_tags = relationship("SnippetTag", back_populates="tag")


class SnippetTag(Base):
    __tablename__ = "snippet_tags"

    __table_args__ = (
        UniqueConstraint("snippet_id", "tag_id", name="uq_snippet_tags_snippet_tag"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    snippet_id = Column(
        Integer,
        ForeignKey("snippets.id"),
        nullable=False,
        index=True,
    )
    tag_id = Column(
        Integer,
        ForeignKey("tags.id"),
        nullable=False,
        index=True,
    )

    snippet = relationship("Snippet", back_populates="snippet_tags")
    tag = relationship("Tag", back_populates="snippet_tags")
