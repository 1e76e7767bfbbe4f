from typing import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.db import get_db
from app.services.message_service import MessageService
from app.services.snippet_service import SnippetService
from app.services.task_service import TaskService
from app.services.weather_cache_service import WeatherCacheService


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    return MessageService(db)


def get_snippet_service(db: Session = Depends(get_db)) -> SnippetService:
    return SnippetService(db)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)


def get_weather_cache_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Iterator[WeatherCacheService]:
    """Weather service for one request; its provider session is closed after."""
    service = WeatherCacheService(db, settings=settings)
    try:
        yield service
    finally:
        service.close()
