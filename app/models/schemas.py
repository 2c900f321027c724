from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Units are fixed for the stored snapshot, whatever the provider reports.
HOURLY_UNITS = {"time": "iso8601", "temperature_2m": "°C"}


class IngestInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Raw value as received; coerced when the record is built.
    principal_id: Any
    content: Any


class IngestRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    principal_id: int | float = Field(alias="principalId")
    created_at: str = Field(alias="createdAt")
    body: Any

    def to_item(self) -> dict:
        return self.model_dump(by_alias=True)


class HourlySeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: list[str]
    temperature_2m: list[float | None]


class ForecastSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float | None = None
    longitude: float | None = None
    generationtime_ms: float | None = None
    utc_offset_seconds: int | None = None
    timezone: str | None = None
    timezone_abbreviation: str | None = None
    elevation: float | None = None
    hourly_units: dict[str, str] = Field(default_factory=lambda: dict(HOURLY_UNITS))
    hourly: HourlySeries


class ForecastRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    forecast: ForecastSnapshot

    def to_item(self) -> dict:
        return self.model_dump()
