"""
API Routes.
"""
from .health import router as health_router
from .reels import router as reels_router

__all__ = [
    "health_router",
    "reels_router",
]
