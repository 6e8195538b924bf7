"""
API package for workout planner sync.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

from api.deps import get_settings

__all__ = [
    "get_settings",
]
