"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_settings
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/config")
def health_config(settings: Settings = Depends(get_settings)):
    """Non-secret runtime configuration, for checking a deployment."""
    return {
        "environment": settings.environment,
        "mock_mode": settings.mock_mode,
        "garmin_configured": settings.has_garmin_credentials,
    }
