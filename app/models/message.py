"""Contact form message model."""

from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text

from app.db import Base
from app.models.mixins import CreatedAtMixin


class Message(Base, CreatedAtMixin):
    """A contact form submission. Rows are never updated or deleted."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    message = Column(Text, nullable=False)
