# API endpoints and routers

from .health_endpoints import router as health_router
from .trips_endpoints import router as trips_router
from .partner_endpoints import router as partner_router

__all__ = [
    "health_router",
    "trips_router",
    "partner_router",
]
