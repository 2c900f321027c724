from dataclasses import dataclass

from app.core.config import Settings
from app.core.database import create_engine_from_url, create_session_factory
from app.pipelines.forecast import ForecastPipeline
from app.pipelines.ingest import IngestPipeline
from app.services.open_meteo import OpenMeteoClient
from app.services.store import SqlRecordStore


@dataclass
class Services:
    """Process-wide collaborators, built once at startup and passed in explicitly."""

    settings: Settings
    engine: object
    event_store: SqlRecordStore
    weather_store: SqlRecordStore
    weather_client: OpenMeteoClient

    def ensure_tables(self) -> None:
        self.event_store.ensure_table(self.engine)
        self.weather_store.ensure_table(self.engine)

    def ingest_pipeline(self) -> IngestPipeline:
        return IngestPipeline(self.event_store)

    def forecast_pipeline(self) -> ForecastPipeline:
        return ForecastPipeline(self.weather_client, self.weather_store)

    def close(self) -> None:
        self.engine.dispose()


def build_services(settings: Settings) -> Services:
    engine = create_engine_from_url(settings.database_url)
    session_factory = create_session_factory(engine)
    return Services(
        settings=settings,
        engine=engine,
        event_store=SqlRecordStore(session_factory, settings.events_table),
        weather_store=SqlRecordStore(session_factory, settings.weather_table),
        weather_client=OpenMeteoClient(
            settings.forecast_url,
            settings.latitude,
            settings.longitude,
            timeout=settings.forecast_timeout,
        ),
    )
