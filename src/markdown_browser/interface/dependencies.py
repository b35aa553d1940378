"""FastAPI dependency injection wiring."""

from __future__ import annotations

from markdown_browser.infrastructure.config import get_settings
from markdown_browser.infrastructure.github_client import get_registry
from markdown_browser.infrastructure.github_rest_adapter import GitHubRestAdapter
from markdown_browser.services.browse_repo import BrowseRepoUseCase
from markdown_browser.services.ttl_cache import TtlCache

_cache: TtlCache | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _cache  # noqa: PLW0603

    settings = get_settings()
    _cache = TtlCache() if settings.cache_ttl_seconds > 0 else None


async def shutdown() -> None:
    """Release shared resources."""
    global _cache  # noqa: PLW0603

    await get_registry().aclose()
    _cache = None


def get_use_case() -> BrowseRepoUseCase:
    """Build the use case with the shared adapter and the opt-in cache."""
    settings = get_settings()
    return BrowseRepoUseCase(
        browser=GitHubRestAdapter(client_provider=get_registry().get),
        cache=_cache,
        cache_ttl=settings.cache_ttl_seconds,
    )


def cache_control_header() -> str:
    return f"public, max-age={get_settings().cache_max_age}"
