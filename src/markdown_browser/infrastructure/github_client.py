"""Authenticated GitHub API client and its process-wide registry."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable

import httpx

from markdown_browser.domain.exceptions import (
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    UpstreamError,
)
from markdown_browser.infrastructure.config import Settings, get_settings
from markdown_browser.infrastructure.credentials import resolve_credential

logger = logging.getLogger(__name__)

_USER_AGENT = "markdown-browser/1.0"


def _provider_message(resp: httpx.Response) -> str:
    """Extract GitHub's ``message`` field, falling back to the reason phrase."""
    try:
        data = resp.json()
    except ValueError:
        return resp.reason_phrase or "unknown error"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.reason_phrase or "unknown error"


class GitHubClient:
    """Thin authenticated wrapper around ``httpx.AsyncClient``.

    Holds the auth context only; every request is a plain GET whose failure
    is translated into an :class:`UpstreamError` subclass.
    """

    def __init__(
        self,
        token: str,
        http: httpx.AsyncClient,
        base_url: str = "https://api.github.com",
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": _USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": f"Bearer {token}",
        }

    async def get_json(
        self,
        endpoint: str,
        params: dict[str, str | int] | None = None,
    ) -> Any:
        """GET *endpoint* and return the decoded JSON body."""
        url = f"{self._base_url}{endpoint}"
        try:
            resp = await self._http.get(url, headers=self._headers, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Network error fetching {endpoint}: {exc}") from exc

        if resp.status_code == 200:
            try:
                return resp.json()
            except ValueError as exc:
                raise UpstreamError(
                    f"GitHub API returned a non-JSON body for {endpoint}",
                    status_code=resp.status_code,
                ) from exc

        message = _provider_message(resp)
        logger.debug("GitHub API %s -> HTTP %s: %s", endpoint, resp.status_code, message)

        if resp.status_code == 404:
            raise RepositoryNotFoundError(
                f"Not found: {endpoint} ({message})", status_code=404
            )

        if resp.status_code == 403 and resp.headers.get("x-ratelimit-remaining") == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                    "%Y-%m-%d %H:%M:%S UTC"
                )
            except (ValueError, OSError):
                reset_str = reset_raw or "unknown"
            raise GitHubRateLimitError(
                f"GitHub API rate limit exceeded. Resets at {reset_str}.",
                status_code=403,
            )

        if resp.status_code in (401, 403):
            raise RepositoryAccessDeniedError(
                f"Access denied: {message}", status_code=resp.status_code
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError(
                "GitHub API rate limit exceeded (HTTP 429).", status_code=429
            )

        raise UpstreamError(
            f"GitHub API returned HTTP {resp.status_code} for {endpoint}: {message}",
            status_code=resp.status_code,
        )

    async def aclose(self) -> None:
        """Release underlying HTTP resources."""
        await self._http.aclose()


class ClientRegistry:
    """Lazily builds one :class:`GitHubClient` and hands out the same instance.

    The first :meth:`get` resolves the credential and constructs the client
    under a lock; later calls take the lock-free fast path.
    """

    def __init__(
        self,
        settings_factory: Callable[[], Settings] = get_settings,
        credential_resolver: Callable[[Settings], str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings_factory = settings_factory
        self._resolve = credential_resolver or (
            lambda settings: resolve_credential(settings=settings)
        )
        self._transport = transport
        self._client: GitHubClient | None = None
        self._lock = threading.Lock()

    def get(self) -> GitHubClient:
        """Return the shared client, constructing it on first use."""
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                settings = self._settings_factory()
                token = self._resolve(settings)
                http = httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.request_timeout),
                    transport=self._transport,
                )
                self._client = GitHubClient(
                    token=token, http=http, base_url=settings.github_api_url
                )
                logger.info("GitHub client initialised for %s", settings.github_api_url)
            return self._client

    async def aclose(self) -> None:
        """Close the shared client, if one was built."""
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            await client.aclose()


_registry = ClientRegistry()


def get_registry() -> ClientRegistry:
    """Return the process-wide registry."""
    return _registry


def get_client() -> GitHubClient:
    """Return the process-wide authenticated GitHub client."""
    return _registry.get()
