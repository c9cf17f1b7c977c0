"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus, error boundary), startup (storage selection).
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
from sqlalchemy.exc import SQLAlchemyError

from inventory_api.api.middleware import register_error_handlers, register_middleware
from inventory_api.api.v1.router import api_router, auth_router
from inventory_api.config import Settings, get_settings
from inventory_api.container import build_container
from inventory_api.core.logging_config import setup_logging
from inventory_api.db.session import create_tables, ping

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: verify the database (fall back to memory in "auto" mode). Shutdown: dispose engine."""
    container = app.state.container
    settings = container.settings
    if container.engine is not None:
        try:
            await ping(container.engine)
            logger.info("database connection established")
            if settings.db_create_tables:
                await create_tables(container.engine)
        except (SQLAlchemyError, OSError) as exc:
            if settings.storage_backend != "auto":
                raise
            logger.warning("database unavailable (%s); using in-memory repositories", exc)
            await container.engine.dispose()
            container = build_container(settings, backend="memory")
            app.state.container = container
    yield
    if container.engine is not None:
        await container.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Inventory items and users behind JWT authentication.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)
    register_error_handlers(app)

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(auth_router, tags=["auth"])
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (`inventory-api` console script)."""
    settings = get_settings()
    uvicorn.run(
        "inventory_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
