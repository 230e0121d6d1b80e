"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from investment_tracker import __version__
from investment_tracker.api.routes import api_router
from investment_tracker.config import AppSettings, get_settings
from investment_tracker.core.logging import setup_logging
from investment_tracker.core.telemetry import setup_telemetry
from investment_tracker.db.init import init_database
from investment_tracker.db.session import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI, db: Database):
    await init_database(db)
    try:
        yield
    finally:
        await db.dispose()


def create_app(database: Database | None = None, settings: AppSettings | None = None) -> FastAPI:
    """Build the application around ``database`` (defaults to the configured URL)."""

    settings = settings or get_settings()
    database_instance = database or Database(settings.database_url)

    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lambda app: _lifespan(app, database_instance),
    )
    app.state.database = database_instance
    app.state.settings = settings
    setup_telemetry(app, settings, engine=database_instance.engine)
    logger.info("Investment tracker configuration: %s", settings.dict_for_logging())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get(f"{settings.api_prefix}/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Return service readiness metadata."""

        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
        }

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


__all__ = ["app", "create_app"]
