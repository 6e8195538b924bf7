"""
FastAPI application for the workout step transform service.

The API exposes the codec without any Garmin account: callers post Garmin
``workoutSteps`` or planning steps and get the other format back, or post
planning workouts to have them validated.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Served by uvicorn (python -m backend)
    app = create_app()

    # In tests, skip .env and pin the environment
    test_app = create_app(settings=Settings(environment="test", _env_file=None))
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the transform API.

    Args:
        settings: Settings to use; defaults to get_settings() (environment and .env)

    Returns:
        FastAPI app with the health and transform routers mounted
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)
    _init_sentry(settings)

    app = FastAPI(
        title="Workout Planner Sync API",
        description="Conversion and validation of Garmin workout steps",
        version="1.0.0",
    )

    _include_routers(app)

    if settings.mock_mode:
        logger.info("MOCK_MODE is active")

    return app


def _configure_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL to the package loggers."""
    for name in ("api", "application", "backend", "domain", "infrastructure"):
        logging.getLogger(name).setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for workout-planner-sync")


def _include_routers(app: FastAPI) -> None:
    from api.routers import health_router, transform_router

    app.include_router(health_router)
    app.include_router(transform_router)


app = create_app()
