import logging

import requests

from app.core.errors import FetchError, ParseError

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    """Fetches the hourly temperature forecast for one fixed location."""

    def __init__(self, url: str, latitude: float, longitude: float, timeout: float | None = None):
        self.url = url
        self.latitude = latitude
        self.longitude = longitude
        self.timeout = timeout

    @property
    def params(self) -> dict:
        # temperature only, no wind or humidity series
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "hourly": "temperature_2m",
        }

    def fetch_forecast(self) -> dict:
        """Perform one GET against the forecast endpoint and return the decoded JSON.

        Raises FetchError on transport failure or a non-2xx status, ParseError
        when the body is not JSON.
        """
        try:
            resp = requests.get(self.url, params=self.params, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch weather data: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise FetchError(
                f"Failed to fetch weather data: {resp.status_code} {resp.reason}",
                status_code=resp.status_code,
                reason=resp.reason,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(
                "Weather API returned a non-JSON body",
                status_code=resp.status_code,
                reason=resp.reason,
            ) from e
        logger.debug("Fetched weather data for %s,%s", self.latitude, self.longitude)
        return data
