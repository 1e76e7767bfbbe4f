from app.services.message_service import MessageService
from app.services.snippet_service import SnippetService
from app.services.task_service import TaskService
from app.services.weather_cache_service import WeatherCacheService

__all__ = [
    "MessageService",
    "SnippetService",
    "TaskService",
    "WeatherCacheService",
]
