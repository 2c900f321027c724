# Deployment entry module: services are built once per process at import.
from app.core.config import Settings
from app.core.logging import configure_logging
from app.core.wiring import build_services
from app.handlers import make_handlers

settings = Settings.from_env()
configure_logging(settings.log_level)

services = build_services(settings)
services.ensure_tables()

ingest_handler, forecast_handler = make_handlers(services)
