"""API routers."""

from backend.api.health import router as health_router
from backend.api.chat import router as chat_router

__all__ = [
    "health_router",
    "chat_router",
]
