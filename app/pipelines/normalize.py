import uuid
from collections.abc import Mapping
from datetime import datetime, timezone

from pydantic import ValidationError as SchemaError

from app.core.errors import ShapeError
from app.models.schemas import (
    HOURLY_UNITS,
    ForecastRecord,
    ForecastSnapshot,
    IngestInput,
    IngestRecord,
)
from app.pipelines.validation import coerce_number

SNAPSHOT_FIELDS = (
    "latitude",
    "longitude",
    "generationtime_ms",
    "utc_offset_seconds",
    "timezone",
    "timezone_abbreviation",
    "elevation",
)


def new_record_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2025-09-20T10:15:00.123Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_ingest_record(validated: IngestInput, id_factory=new_record_id, clock=utc_now) -> IngestRecord:
    return IngestRecord(
        id=id_factory(),
        principal_id=coerce_number(validated.principal_id),
        created_at=iso_timestamp(clock()),
        body=validated.content,
    )


def build_forecast_record(payload, id_factory=new_record_id) -> ForecastRecord:
    """Project an Open-Meteo response onto the stored snapshot shape.

    Raises ShapeError if the hourly series are missing, not lists, or of
    different lengths.
    """
    if not isinstance(payload, Mapping):
        raise ShapeError(f"Forecast payload must be an object, got {type(payload).__name__}")
    hourly = payload.get("hourly")
    if not isinstance(hourly, Mapping):
        raise ShapeError("Forecast payload has no hourly section")
    for key in ("time", "temperature_2m"):
        if not isinstance(hourly.get(key), list):
            raise ShapeError(f"Forecast payload is missing hourly.{key}")

    if len(hourly["time"]) != len(hourly["temperature_2m"]):
        raise ShapeError(
            "hourly.time and hourly.temperature_2m differ in length "
            f"({len(hourly['time'])} vs {len(hourly['temperature_2m'])})"
        )

    try:
        snapshot = ForecastSnapshot(
            **{field: payload.get(field) for field in SNAPSHOT_FIELDS},
            hourly_units=dict(HOURLY_UNITS),
            hourly={
                "time": hourly["time"],
                "temperature_2m": hourly["temperature_2m"],
            },
        )
    except SchemaError as error:
        raise ShapeError(f"Unexpected forecast payload: {error.error_count()} invalid field(s)") from error

    return ForecastRecord(id=id_factory(), forecast=snapshot)
