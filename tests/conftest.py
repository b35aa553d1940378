"""Shared fixtures: an in-memory GitHub API behind ``httpx.MockTransport``."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from markdown_browser.domain.entities import (
    DirectoryEntry,
    FileContent,
    MarkdownFile,
    RepositorySummary,
)
from markdown_browser.domain.exceptions import RepositoryNotFoundError
from markdown_browser.domain.value_objects import RepoRef
from markdown_browser.infrastructure.github_client import GitHubClient
from markdown_browser.infrastructure.github_rest_adapter import GitHubRestAdapter

Route = Callable[[httpx.Request], httpx.Response]


class FakeGitHub:
    """Answers GitHub API paths from a route table and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        body: Any = None,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes[path] = lambda request: httpx.Response(
            status, json=body, headers=headers
        )

    def add_handler(self, path: str, route: Route) -> None:
        self.routes[path] = route

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> GitHubClient:
        http = httpx.AsyncClient(transport=self.transport)
        return GitHubClient(token="test-token", http=http)

    def adapter(self) -> GitHubRestAdapter:
        client = self.client()
        return GitHubRestAdapter(client_provider=lambda: client)


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def no_pat(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure no ambient token leaks into the test."""
    monkeypatch.delenv("GITHUB_PAT", raising=False)


class FakeBrowser:
    """In-memory ``RepoBrowser`` that counts calls and can be told to fail."""

    def __init__(self) -> None:
        self.repositories: list[RepositorySummary] = []
        self.files: dict[str, list[MarkdownFile]] = {}
        self.contents: dict[tuple[str, str], FileContent] = {}
        self.directories: dict[tuple[str, str], list[DirectoryEntry]] = {}
        self.error: Exception | None = None
        self.calls: list[tuple[Any, ...]] = []

    def _check(self, *call: Any) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    async def list_repositories(self) -> list[RepositorySummary]:
        self._check("repos")
        return list(self.repositories)

    async def list_markdown_files(self, ref: RepoRef) -> list[MarkdownFile]:
        self._check("files", ref)
        return list(self.files.get(ref.full_name, []))

    async def get_file_content(self, ref: RepoRef, path: str) -> FileContent:
        self._check("content", ref, path)
        try:
            return self.contents[(ref.full_name, path)]
        except KeyError:
            raise RepositoryNotFoundError(f"Not found: {path}", status_code=404) from None

    async def get_directory_contents(
        self, ref: RepoRef, path: str = ""
    ) -> list[DirectoryEntry]:
        self._check("dir", ref, path)
        return list(self.directories.get((ref.full_name, path), []))


@pytest.fixture
def browser() -> FakeBrowser:
    b = FakeBrowser()
    b.repositories = [
        RepositorySummary(id=2, name="docs", full_name="octo/docs", private=False),
        RepositorySummary(id=1, name="notes", full_name="octo/notes", private=True),
    ]
    b.files["octo/docs"] = [
        MarkdownFile(path="README.md", sha="a1", size=10, url="https://api.github.com/x"),
        MarkdownFile(path="docs/guide.mdx", sha="a2"),
    ]
    b.contents[("octo/docs", "README.md")] = FileContent(
        path="README.md", sha="a1", size=10, raw="# Docs\n"
    )
    b.directories[("octo/docs", "")] = [
        DirectoryEntry(name="README.md", path="README.md", type="file", sha="a1", size=10),
        DirectoryEntry(name="docs", path="docs", type="dir", sha="t1"),
    ]
    return b
