"""
API routers.

- health_router: liveness and configuration checks
- transform_router: stateless conversion and validation of workout steps
"""

from api.routers.health import router as health_router
from api.routers.transform import router as transform_router

__all__ = [
    "health_router",
    "transform_router",
]
