"""API routers."""

from .analyses import router as analyses_router
from .health import router as health_router

__all__ = ["analyses_router", "health_router"]
