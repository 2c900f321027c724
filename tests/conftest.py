"""Pytest configuration and shared fixtures."""
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from app.core.config import Settings
from app.core.wiring import build_services


@pytest.fixture
def settings():
    """Settings pointing at an in-memory SQLite store."""
    return Settings(
        database_url="sqlite://",
        events_table="Events",
        weather_table="Weather",
        forecast_url="https://weather.test/v1/forecast",
    )


@pytest.fixture
def services(settings):
    """Services with tables created, disposed after the test."""
    built = build_services(settings)
    built.ensure_tables()
    yield built
    built.close()


@pytest.fixture
def event_store(services):
    return services.event_store


@pytest.fixture
def weather_store(services):
    return services.weather_store


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2025-09-20 10:15:00.123 UTC."""
    moment = datetime(2025, 9, 20, 10, 15, 0, 123000, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def sample_forecast_payload():
    """Open-Meteo style response for 4 hours of temperature data."""
    return {
        "latitude": 50.4375,
        "longitude": 30.5,
        "generationtime_ms": 0.025,
        "utc_offset_seconds": 0,
        "timezone": "GMT",
        "timezone_abbreviation": "GMT",
        "elevation": 188.0,
        "hourly_units": {"time": "unixtime", "temperature_2m": "°F"},
        "hourly": {
            "time": ["2025-09-20T00:00", "2025-09-20T01:00", "2025-09-20T02:00", "2025-09-20T03:00"],
            "temperature_2m": [12.1, 11.8, 11.4, 11.0],
        },
    }


@pytest.fixture
def fake_fetcher(sample_forecast_payload):
    """Fetcher stub returning the sample payload."""
    fetcher = MagicMock()
    fetcher.fetch_forecast.return_value = sample_forecast_payload
    return fetcher
