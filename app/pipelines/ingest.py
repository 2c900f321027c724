import logging

from app.core.errors import BadRequest, StoreError
from app.core.logging import describe
from app.pipelines.normalize import build_ingest_record, new_record_id, utc_now
from app.pipelines.result import PipelineResult
from app.pipelines.validation import parse_event_body, validate_ingest_payload

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Validate an HTTP-shaped event and store it as an ingest record.

    Responds 400 on bad input, 500 when the store write fails and 201 with the
    stored record otherwise. Never raises.
    """

    def __init__(self, store, id_factory=new_record_id, clock=utc_now):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    def run(self, event) -> PipelineResult:
        try:
            return self._run(event)
        except Exception:
            logger.exception("Unexpected failure while ingesting event")
            return PipelineResult(500, {"message": "Internal Server Error"})

    def _run(self, event) -> PipelineResult:
        logger.info("Received event: %s", describe(event))

        try:
            payload = parse_event_body(event)
        except BadRequest as e:
            logger.error("Error parsing event body: %s", e)
            return PipelineResult(e.status_code, {"message": str(e)})

        try:
            validated = validate_ingest_payload(payload)
        except BadRequest as e:
            logger.error("Validation failed: %s (input: %s)", e, describe(payload))
            return PipelineResult(e.status_code, {"message": str(e)})

        record = build_ingest_record(validated, id_factory=self.id_factory, clock=self.clock)
        item = record.to_item()
        logger.info("Saving event to %s: %s", self.store.table_name, describe(item))

        try:
            self.store.put(item)
        except StoreError as e:
            logger.error("Store put failed for event %s: %s", record.id, e)
            return PipelineResult(e.status_code, {"message": "Failed to save event", "error": str(e)})

        logger.info("Saved event %s", record.id)
        return PipelineResult(201, {"message": "Event saved successfully", "event": item})
