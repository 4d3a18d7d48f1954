"""API route modules."""

from agrostock.api.routes.costs import router as costs_router
from agrostock.api.routes.health import router as health_router
from agrostock.api.routes.inventory import router as inventory_router

__all__ = [
    "health_router",
    "inventory_router",
    "costs_router",
]
