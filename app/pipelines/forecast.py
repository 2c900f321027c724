import logging

from app.core.errors import ShapeError, StoreError, UpstreamError
from app.core.logging import describe
from app.pipelines.normalize import build_forecast_record, new_record_id
from app.pipelines.result import PipelineResult

logger = logging.getLogger(__name__)


def _failure(message: str, error: Exception, **extra) -> PipelineResult:
    return PipelineResult(500, {"success": False, "message": message, "error": str(error), **extra})


class ForecastPipeline:
    """Fetch the current forecast and store one snapshot per invocation.

    The trigger event is only logged. Responds 200 with the new snapshot id,
    or 500 with ``success: false`` when fetching, shaping or storing fails.
    """

    def __init__(self, fetcher, store, id_factory=new_record_id):
        self.fetcher = fetcher
        self.store = store
        self.id_factory = id_factory

    def run(self, event=None) -> PipelineResult:
        try:
            return self._run(event)
        except Exception as e:
            logger.exception("Unexpected failure while storing weather data")
            return _failure("Internal Server Error", e)

    def _run(self, event) -> PipelineResult:
        logger.info("Received event: %s", describe(event))

        try:
            payload = self.fetcher.fetch_forecast()
        except UpstreamError as e:
            logger.error("Error fetching weather data: %s", e)
            return _failure("Failed to fetch weather data", e, upstreamStatus=e.upstream_status)

        try:
            record = build_forecast_record(payload, id_factory=self.id_factory)
        except ShapeError as e:
            logger.error("Unexpected weather payload: %s", e)
            return _failure("Unexpected weather data format", e)

        item = record.to_item()
        logger.info(
            "Saving forecast %s to %s (%d hourly points)",
            record.id,
            self.store.table_name,
            len(record.forecast.hourly.time),
        )

        try:
            self.store.put(item)
        except StoreError as e:
            logger.error("Store put failed for forecast %s: %s", record.id, e)
            return _failure("Failed to save weather data", e)

        logger.info("Successfully inserted forecast %s", record.id)
        return PipelineResult(200, {"success": True, "message": "Weather data stored successfully", "id": record.id})
