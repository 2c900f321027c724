import os
from dataclasses import dataclass

from app.core.errors import ConfigError

DEFAULT_DATABASE_URL = "sqlite:///./records.db"
DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
# Kyiv
DEFAULT_LATITUDE = 50.4375
DEFAULT_LONGITUDE = 30.5
DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:8000"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    events_table: str = "Events"
    weather_table: str = "Weather"
    forecast_url: str = DEFAULT_FORECAST_URL
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    forecast_timeout: float | None = None
    forecast_refresh_minute: int | None = None
    frontend_origins: tuple[str, ...] = ()
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from environment variables.

        Raises ConfigError when a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        # Comma-separated, e.g. FRONTEND_ORIGINS="http://localhost:3000,http://10.5.0.2:3000"
        raw_origins = env.get("FRONTEND_ORIGINS", DEFAULT_ORIGINS)
        origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())

        refresh_minute = _optional_int(env, "FORECAST_REFRESH_MINUTE")
        if refresh_minute is not None and not 0 <= refresh_minute <= 59:
            raise ConfigError(f"FORECAST_REFRESH_MINUTE must be between 0 and 59, got {refresh_minute}")

        return cls(
            database_url=env.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            events_table=_table_name(env, "TARGET_TABLE", "Events"),
            weather_table=_table_name(env, "WEATHER_TABLE", "Weather"),
            forecast_url=env.get("FORECAST_URL", DEFAULT_FORECAST_URL),
            latitude=_float(env, "FORECAST_LATITUDE", DEFAULT_LATITUDE),
            longitude=_float(env, "FORECAST_LONGITUDE", DEFAULT_LONGITUDE),
            forecast_timeout=_optional_float(env, "FORECAST_TIMEOUT_SECONDS"),
            forecast_refresh_minute=refresh_minute,
            frontend_origins=origins,
            log_level=env.get("LOG_LEVEL", "INFO"),
        )


def _table_name(env, key: str, default: str) -> str:
    value = env.get(key, "").strip()
    return value or default


def _float(env, key: str, default: float) -> float:
    value = _optional_float(env, key)
    return default if value is None else value


def _optional_float(env, key: str) -> float | None:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as error:
        raise ConfigError(f"Invalid {key} value: expected a number, got '{raw}'") from error


def _optional_int(env, key: str) -> int | None:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as error:
        raise ConfigError(f"Invalid {key} value: expected an integer, got '{raw}'") from error
