"""API layer module.

Contains FastAPI routers, middleware, and response schemas.
"""

from catalog_api.api.catalog import router as catalog_router
from catalog_api.api.health import router as health_router

__all__ = [
    "catalog_router",
    "health_router",
]
