"""API routers for the Watchdog application."""

from .admin import router as admin_router
from .bills import router as bills_router
from .health import router as health_router
from .legislators import router as legislators_router
from .lobbying import router as lobbying_router
from .spending import router as spending_router
from .summary import router as summary_router

__all__ = [
    "admin_router",
    "bills_router",
    "health_router",
    "legislators_router",
    "lobbying_router",
    "spending_router",
    "summary_router",
]
