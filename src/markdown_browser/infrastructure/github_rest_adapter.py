"""GitHub REST API adapter — implements the RepoBrowser port."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Callable
from urllib.parse import quote

from markdown_browser.domain.entities import (
    DirectoryEntry,
    FileContent,
    MarkdownFile,
    RepositorySummary,
)
from markdown_browser.domain.exceptions import (
    NotADirectoryError,
    NotAFileError,
    UpstreamError,
)
from markdown_browser.domain.value_objects import RepoRef
from markdown_browser.infrastructure.github_client import GitHubClient, get_client
from markdown_browser.services.markdown_filter import filter_markdown

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

_NARROWING_ERRORS = (KeyError, TypeError, ValueError)


def _contents_endpoint(ref: RepoRef, path: str) -> str:
    base = f"/repos/{ref.owner}/{ref.repo}/contents"
    encoded = quote(path.strip("/"), safe="/")
    return f"{base}/{encoded}" if encoded else base


def _expect_dict(data: Any, endpoint: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise UpstreamError(f"Malformed payload for {endpoint}: expected an object")
    return data


def _decode_content(content: str, encoding: str | None, path: str, size: int) -> str:
    """Turn the provider's encoded ``content`` field into text."""
    if encoding in (None, "", "utf-8", "utf8"):
        return content
    if encoding != "base64":
        raise NotAFileError(f"Unsupported content encoding '{encoding}' for {path}")
    # GitHub wraps base64 bodies at 60 columns
    cleaned = "".join(content.split())
    try:
        data = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise NotAFileError(f"Malformed base64 content for {path}") from exc
    if not data and size > 0:
        raise NotAFileError(f"Empty decoded content for {path} ({size} bytes expected)")
    return data.decode("utf-8", errors="replace")


def _repository_summary(item: Any) -> RepositorySummary:
    return RepositorySummary(
        id=int(item["id"]),
        name=str(item["name"]),
        full_name=str(item["full_name"]),
        private=bool(item.get("private", False)),
    )


def _markdown_file(entry: dict[str, Any]) -> MarkdownFile:
    return MarkdownFile(
        path=entry["path"],
        sha=str(entry.get("sha") or ""),
        size=int(entry.get("size") or 0),
        url=entry.get("url"),
    )


def _directory_entry(item: Any) -> DirectoryEntry:
    return DirectoryEntry(
        name=str(item["name"]),
        path=str(item["path"]),
        type=str(item.get("type") or "file"),
        sha=str(item.get("sha") or ""),
        size=int(item.get("size") or 0),
        url=item.get("url"),
    )


class GitHubRestAdapter:
    """Concrete RepoBrowser backed by the GitHub v3 REST API.

    Every operation asks *client_provider* for the shared client, so the
    credential is resolved lazily on the first call that needs it.  Raw JSON
    is narrowed into domain entities here; shape mismatches surface as
    :class:`UpstreamError`.
    """

    def __init__(self, client_provider: Callable[[], GitHubClient] = get_client) -> None:
        self._client_provider = client_provider

    async def list_repositories(self) -> list[RepositorySummary]:
        """GET /user/repos, page by page, until a short page comes back."""
        client = self._client_provider()
        repos: list[RepositorySummary] = []
        page = 1
        while True:
            data = await client.get_json(
                "/user/repos",
                params={
                    "per_page": PAGE_SIZE,
                    "page": page,
                    "sort": "updated",
                    "direction": "desc",
                },
            )
            if not isinstance(data, list):
                raise UpstreamError(f"Unexpected repository list payload on page {page}")

            try:
                repos.extend(_repository_summary(item) for item in data)
            except _NARROWING_ERRORS as exc:
                raise UpstreamError(
                    f"Malformed repository payload for /user/repos page {page}"
                ) from exc

            if len(data) < PAGE_SIZE:
                break
            page += 1

        logger.debug("Listed %d repositories over %d page(s)", len(repos), page)
        return repos

    async def list_markdown_files(self, ref: RepoRef) -> list[MarkdownFile]:
        """Resolve the default branch, walk its tree, keep ``.md`` / ``.mdx`` blobs."""
        client = self._client_provider()
        base = f"/repos/{ref.owner}/{ref.repo}"

        repo_data = _expect_dict(await client.get_json(base), base)
        branch = repo_data.get("default_branch")
        if not branch or not isinstance(branch, str):
            raise UpstreamError(f"Repository {ref.full_name} reports no default branch")

        ref_endpoint = f"{base}/git/ref/heads/{quote(branch, safe='/')}"
        ref_data = _expect_dict(await client.get_json(ref_endpoint), ref_endpoint)
        target = ref_data.get("object")
        commit_sha = target.get("sha") if isinstance(target, dict) else None
        if not commit_sha:
            raise UpstreamError(f"Could not resolve heads/{branch} for {ref.full_name}")

        tree_endpoint = f"{base}/git/trees/{commit_sha}"
        tree_data = _expect_dict(
            await client.get_json(tree_endpoint, params={"recursive": "1"}), tree_endpoint
        )
        if tree_data.get("truncated"):
            # Known limitation: entries beyond the provider's size cap are missing.
            logger.warning("Tree for %s@%s was truncated by GitHub", ref.full_name, branch)

        tree = tree_data.get("tree") or []
        if not isinstance(tree, list):
            raise UpstreamError(f"Malformed payload for {tree_endpoint}: tree is not a list")

        try:
            return [_markdown_file(entry) for entry in filter_markdown(tree)]
        except _NARROWING_ERRORS as exc:
            raise UpstreamError(f"Malformed tree entry in {tree_endpoint}") from exc

    async def get_file_content(self, ref: RepoRef, path: str) -> FileContent:
        """GET /repos/{owner}/{repo}/contents/{path} → decoded file text."""
        client = self._client_provider()
        endpoint = _contents_endpoint(ref, path)
        data = await client.get_json(endpoint)

        if not isinstance(data, dict) or data.get("type") != "file" or not data.get("content"):
            raise NotAFileError(f"'{path}' in {ref.full_name} is not a file")
        if not isinstance(data["content"], str):
            raise UpstreamError(f"Malformed payload for {endpoint}: content is not a string")

        try:
            size = int(data.get("size") or 0)
        except _NARROWING_ERRORS as exc:
            raise UpstreamError(f"Malformed payload for {endpoint}: bad size") from exc

        return FileContent(
            path=path,
            sha=str(data.get("sha") or ""),
            size=size,
            raw=_decode_content(data["content"], data.get("encoding"), path, size),
        )

    async def get_directory_contents(
        self, ref: RepoRef, path: str = ""
    ) -> list[DirectoryEntry]:
        """GET /repos/{owner}/{repo}/contents/{path} → immediate children."""
        client = self._client_provider()
        endpoint = _contents_endpoint(ref, path)
        data = await client.get_json(endpoint)

        if not isinstance(data, list):
            raise NotADirectoryError(f"'{path}' in {ref.full_name} is not a directory")

        try:
            return [_directory_entry(item) for item in data]
        except _NARROWING_ERRORS as exc:
            raise UpstreamError(f"Malformed directory entry in {endpoint}") from exc
