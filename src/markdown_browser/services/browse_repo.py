"""Browse-repository use case — the entry point for the business logic.

It depends only on the :class:`RepoBrowser` port and, when the caller opts
in, a :class:`TtlCache`.  The interface layer injects concrete adapters at
runtime.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

from markdown_browser.domain.entities import (
    DirectoryEntry,
    FileContent,
    MarkdownFile,
    RepositorySummary,
)
from markdown_browser.domain.exceptions import NotAFileError
from markdown_browser.domain.ports.repo_browser import RepoBrowser
from markdown_browser.domain.value_objects import RepoRef
from markdown_browser.services.ttl_cache import TtlCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BrowseRepoUseCase:
    """Lists repositories, markdown files and directories, and fetches files.

    Parameters
    ----------
    browser:
        Adapter that talks to GitHub.
    cache:
        Optional cache consulted before, and filled after, each call.
    cache_ttl:
        Seconds a cached result stays valid.
    """

    def __init__(
        self,
        browser: RepoBrowser,
        cache: TtlCache | None = None,
        cache_ttl: float = 300.0,
    ) -> None:
        self._browser = browser
        self._cache = cache
        self._cache_ttl = cache_ttl

    async def list_repositories(self) -> list[RepositorySummary]:
        logger.info("Listing repositories")
        return await self._cached("repos", self._browser.list_repositories)

    async def list_markdown_files(self, owner: str, repo: str) -> list[MarkdownFile]:
        ref = RepoRef.from_parts(owner, repo)
        logger.info("Listing markdown files in %s", ref.full_name)
        return await self._cached(
            f"files:{ref.full_name}",
            lambda: self._browser.list_markdown_files(ref),
        )

    async def get_file_content(self, owner: str, repo: str, path: str) -> FileContent:
        ref = RepoRef.from_parts(owner, repo)
        path = path.strip().strip("/")
        if not path:
            raise NotAFileError("A file path is required.")
        logger.info("Fetching %s from %s", path, ref.full_name)
        return await self._cached(
            f"content:{ref.full_name}:{path}",
            lambda: self._browser.get_file_content(ref, path),
        )

    async def get_directory_contents(
        self, owner: str, repo: str, path: str = ""
    ) -> list[DirectoryEntry]:
        ref = RepoRef.from_parts(owner, repo)
        path = path.strip().strip("/")
        logger.info("Listing directory '%s' in %s", path or "/", ref.full_name)
        return await self._cached(
            f"dir:{ref.full_name}:{path}",
            lambda: self._browser.get_directory_contents(ref, path),
        )

    async def _cached(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        if self._cache is None:
            return await fetch()
        hit: Any = self._cache.get(key)
        if hit is not None:
            logger.debug("Cache hit for %s", key)
            # Lists are cached as tuples; every hit gets a fresh list
            return list(hit) if isinstance(hit, tuple) else hit  # type: ignore[return-value]
        result = await fetch()
        stored = tuple(result) if isinstance(result, list) else result
        self._cache.set(key, stored, self._cache_ttl)
        return result
