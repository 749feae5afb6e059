"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from catalog_api.api.brands import router as brands_router
from catalog_api.api.collections import router as collections_router
from catalog_api.api.files import router as files_router
from catalog_api.api.health import router as health_router
from catalog_api.api.products import router as products_router

__all__ = [
    "brands_router",
    "collections_router",
    "files_router",
    "health_router",
    "products_router",
]
