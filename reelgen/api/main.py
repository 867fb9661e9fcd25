"""
FastAPI Application - Reel generation and feed API.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reelgen.config import get_config

from .dependencies import get_orchestrator
from .routes import health_router, reels_router
from .routes.reels import FEED_PATH
from .exceptions import APIError, api_error_handler, generic_exception_handler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info("Starting Reel API...")
    logger.info("=" * 60)

    get_config().log_status()

    logger.info("Server ready! Reel feed available at /api/reels")

    yield

    logger.info("Shutting down Reel API...")
    if get_orchestrator.cache_info().currsize:
        await get_orchestrator().close()


class FeedAwareCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that lets some paths answer their own preflight.

    The feed replies 204 with a one-day max age and GET only. Preflights to
    excluded paths go straight to the router; other requests are handled as usual.
    """

    def __init__(self, app, exclude_paths=(), **kwargs):
        super().__init__(app, **kwargs)
        self.exclude_paths = frozenset(exclude_paths)

    async def __call__(self, scope, receive, send):
        if (
            scope["type"] == "http"
            and scope["method"] == "OPTIONS"
            and scope["path"].rstrip("/") in self.exclude_paths
        ):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def create_app(debug: bool = False) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="Reel API",
        description="AI-generated sports celebrity reels and their feed",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=debug,
    )

    app.add_middleware(
        FeedAwareCORSMiddleware,
        exclude_paths=[FEED_PATH],
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(health_router)
    app.include_router(reels_router)

    return app


app = create_app(debug=get_config().debug)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reelgen.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
