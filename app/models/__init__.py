from app.models.message import Message
from app.models.snippet import Snippet, SnippetTag, Tag
from app.models.task import Task, TaskCategory, TaskDependency
from app.models.weather_cache import WeatherCacheEntry

__all__ = [
    "Message",
    "Snippet",
    "SnippetTag",
    "Tag",
    "Task",
    "TaskCategory",
    "TaskDependency",
    "WeatherCacheEntry",
]
