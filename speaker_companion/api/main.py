"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, speaker_companion.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from speaker_companion.api.deps.dependencies import ServiceContainer
from speaker_companion.configs import Settings, get_settings
from speaker_companion.observability import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)

from .routers import analyses_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the service container on startup and tears it down on shutdown.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    container = ServiceContainer(app.state.settings)
    await container.startup()
    app.state.container = container
    logger.info("Service container started")

    yield

    # Shutdown
    await container.shutdown()
    logger.info("Service container stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings override (defaults to environment-derived settings)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Speaker Companion API",
        description="Presentation video analysis: submission, progress polling and reports",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(analyses_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        "speaker_companion.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
