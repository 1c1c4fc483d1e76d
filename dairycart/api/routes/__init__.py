"""API routes module."""

from dairycart.api.routes.attributes import router as attributes_router
from dairycart.api.routes.discounts import router as discounts_router
from dairycart.api.routes.health import router as health_router
from dairycart.api.routes.products import router as products_router
from dairycart.api.routes.progenitors import router as progenitors_router
from dairycart.api.routes.users import router as users_router

__all__ = [
    "attributes_router",
    "discounts_router",
    "health_router",
    "products_router",
    "progenitors_router",
    "users_router",
]
