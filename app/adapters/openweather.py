"""Client for the OpenWeatherMap current-weather endpoint."""

from __future__ import annotations

from typing import Any, Optional

import requests

from app.core.errors import UpstreamError
from app.infra.logging_config import get_logger

logger = get_logger("openweather")

UNITS = "imperial"
DEFAULT_ERROR_MESSAGE = "Failed to fetch weather data"


class OpenWeatherClient:
    """Fetches current weather for a city name."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def fetch_current(self, city: str) -> dict[str, Any]:
        """
        Return the provider's JSON body for ``city``.

        Raises UpstreamError carrying the provider's status code and message
        when the response is not 2xx, or 502 when the request itself fails.
        """
        params = {"q": city, "units": UNITS, "appid": self._api_key}
        try:
            resp = self._session.get(self._api_url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error("OpenWeather request failed for %s: %s", city, e)
            raise UpstreamError(f"{DEFAULT_ERROR_MESSAGE}: {e}", status_code=502) from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.ok:
            message = DEFAULT_ERROR_MESSAGE
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
            logger.error(
                "OpenWeather API error for %s: HTTP %s %s", city, resp.status_code, data
            )
            raise UpstreamError(message, status_code=resp.status_code)

        if not isinstance(data, dict):
            raise UpstreamError("Invalid response from weather provider", status_code=502)
        return data
