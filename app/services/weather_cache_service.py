"""Weather lookup with a time-bounded cache in front of the provider."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.adapters.openweather import OpenWeatherClient
from app.config import Settings, get_settings
from app.core.errors import MissingParameterError, ServiceUnavailableError
from app.infra.logging_config import get_logger
from app.models.mixins import utcnow
from app.models.weather_cache import WeatherCacheEntry
from app.utils.db.upsert import insert_or_update_by_key

logger = get_logger("weather_cache")


def normalize_city(city: str) -> str:
    """Cache key for a city name."""
    return city.strip().lower()


class WeatherCacheService:
    """
    Serves weather data from ``weather_cache`` while the row is fresh and
    refetches from the provider otherwise.

    The check and the write are not locked: two concurrent misses for the
    same city both call the provider and the last write wins.
    """

    def __init__(
        self,
        db: Session,
        *,
        settings: Optional[Settings] = None,
        client: Optional[OpenWeatherClient] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.db = db
        self.settings = settings or get_settings()
        self._client = client
        self._owns_client = False
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.settings.weather_cache_ttl_minutes)

    def _get_client(self) -> OpenWeatherClient:
        if self._client is None:
            api_key = self.settings.openweather_api_key
            if not api_key:
                logger.error("OpenWeather API key is not configured")
                raise ServiceUnavailableError("Weather service is not configured")
            self._client = OpenWeatherClient(
                api_key=api_key,
                api_url=self.settings.openweather_api_url,
                timeout=self.settings.weather_timeout_seconds,
            )
            self._owns_client = True
        return self._client

    def close(self) -> None:
        """Release the provider client if this service built it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
            self._owns_client = False

    def get_cached(self, city: str) -> Optional[dict[str, Any]]:
        """Return the cached payload for a normalized city if still fresh."""
        cutoff = self._clock() - self.ttl
        entry = (
            self.db.query(WeatherCacheEntry)
            .filter(
                WeatherCacheEntry.city == city,
                WeatherCacheEntry.created_at >= cutoff,
            )
            .first()
        )
        if entry is None:
            return None
        return json.loads(entry.data)

    def store(self, city: str, data: dict[str, Any]) -> bool:
        """Upsert the cache row. Failures are logged and reported as False."""
        try:
            insert_or_update_by_key(
                self.db,
                WeatherCacheEntry,
                "city",
                city,
                {"data": json.dumps(data), "created_at": self._clock()},
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Failed to cache weather data for %s: %s", city, e)
            return False
        logger.info("Weather data cached for %s", city)
        return True

    def get_weather(self, city: Optional[str]) -> dict[str, Any]:
        """
        Return current weather for ``city``.

        Raises MissingParameterError for an empty city, ServiceUnavailableError
        when no API key is configured and UpstreamError when the provider fails.
        """
        if not city or not city.strip():
            raise MissingParameterError("City parameter is required")

        client = self._get_client()
        key = normalize_city(city)

        cached = self.get_cached(key)
        if cached is not None:
            logger.info("Serving cached weather data for %s", key)
            return cached

        logger.info("Fetching fresh weather data for %s", key)
        data = client.fetch_current(key)
        self.store(key, data)
        return data
