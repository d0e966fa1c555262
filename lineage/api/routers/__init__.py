"""API routers."""

from .counter import router as counter_router
from .locations import router as locations_router

__all__ = ["counter_router", "locations_router"]
