from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import Settings
from app.core.logging import configure_logging
from app.core.wiring import build_services
from app.tasks import scheduler


def create_app(services=None) -> FastAPI:
    """Build the API. Without ``services`` they are constructed from the environment."""
    if services is None:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        services = build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services.ensure_tables()
        jobs = scheduler.start(services)
        try:
            yield
        finally:
            scheduler.stop(jobs)

    app = FastAPI(title="Record Ingest API", lifespan=lifespan)
    app.state.services = services

    # Configure allowed origins via FRONTEND_ORIGINS env var (comma-separated).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(services.settings.frontend_origins) or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


app = create_app()
