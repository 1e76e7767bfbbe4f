"""Cached provider responses for the weather lookup."""

from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text

from app.db import Base
from app.models.mixins import CreatedAtMixin


class WeatherCacheEntry(Base, CreatedAtMixin):
    """One row per case-folded city; created_at is reset on every overwrite."""

    __tablename__ = "weather_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    city = Column(String(128), unique=True, nullable=False, index=True)
    data = Column(Text, nullable=False)
