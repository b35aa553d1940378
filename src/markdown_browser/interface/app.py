"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from markdown_browser.infrastructure.config import get_settings
from markdown_browser.interface.dependencies import shutdown, startup
from markdown_browser.interface.error_handlers import register_error_handlers
from markdown_browser.interface.routes import health_router, router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the opt-in cache on startup; close the GitHub client on shutdown."""
    await startup()
    settings = get_settings()
    logger.info(
        "Serving GitHub markdown from %s (cache ttl %ss)",
        settings.github_api_url,
        settings.cache_ttl_seconds,
    )
    try:
        yield
    finally:
        await shutdown()


def create_app() -> FastAPI:
    """Wire routes, error handlers and lifespan into a FastAPI app."""
    app = FastAPI(
        title="GitHub Markdown Browser",
        version="1.0.0",
        description=(
            "Lists the authenticated user's GitHub repositories, the markdown "
            "files inside them, and returns the decoded content of a file."
        ),
        lifespan=_lifespan,
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(router)
    return app
