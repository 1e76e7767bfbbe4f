"""Weather API: current conditions for a city, served through the cache."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from app.routers.utils.dependencies import get_weather_cache_service
from app.services.weather_cache_service import WeatherCacheService

router = APIRouter(
    prefix="/weather",
    tags=["weather"],
)


@router.get("", response_model=dict)
def get_weather(
    city: Optional[str] = Query(None),
    svc: WeatherCacheService = Depends(get_weather_cache_service),
) -> dict[str, Any]:
    """Return the provider's JSON for ``city``, cached for the freshness window."""
    return svc.get_weather(city)
