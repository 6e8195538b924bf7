"""
FastAPI dependency providers.

Usage:
    from fastapi import Depends
    from api.deps import get_settings

    @router.get("/health/config")
    def health_config(settings: Settings = Depends(get_settings)):
        ...
"""

from backend.settings import Settings
from backend.settings import get_settings as _get_settings


def get_settings() -> Settings:
    """Get application settings (cached)."""
    return _get_settings()
