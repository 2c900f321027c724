"""Lambda-style entry points for the two pipelines."""
from app.core.wiring import Services


def make_handlers(services: Services):
    """Return ``(ingest_handler, forecast_handler)`` bound to ``services``."""

    def ingest_handler(event, context=None):
        return services.ingest_pipeline().run(event).to_lambda_response()

    def forecast_handler(event, context=None):
        return services.forecast_pipeline().run(event).to_lambda_response()

    return ingest_handler, forecast_handler
