"""API route modules."""

from outletstock.api.routes.health import router as health_router
from outletstock.api.routes.inventory import router as inventory_router
from outletstock.api.routes.materials import router as materials_router
from outletstock.api.routes.notifications import router as notifications_router
from outletstock.api.routes.transfers import router as transfers_router

__all__ = [
    "health_router",
    "materials_router",
    "inventory_router",
    "transfers_router",
    "notifications_router",
]
