"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from markdown_browser.interface.dependencies import cache_control_header, get_use_case
from markdown_browser.interface.schemas import (
    DirectoryEntryOut,
    DirectoryResponse,
    ErrorResponse,
    FileContentResponse,
    MarkdownFileOut,
    MarkdownFilesResponse,
    RepositoriesResponse,
    RepositoryOut,
)
from markdown_browser.services.browse_repo import BrowseRepoUseCase

router = APIRouter(prefix="/api/github")
health_router = APIRouter()


@health_router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    """Liveness probe; does not touch GitHub."""
    return {"status": "ok"}


def _error(description: str) -> dict[str, Any]:
    return {"model": ErrorResponse, "description": description}


_UPSTREAM_RESPONSES: dict[int | str, dict[str, Any]] = {
    403: _error("Access denied by GitHub"),
    404: _error("Repository or path not found"),
    429: _error("GitHub API rate limit exceeded"),
    500: _error("Server is not configured"),
    502: _error("GitHub API error"),
}


@router.get("/repos", response_model=RepositoriesResponse, responses=_UPSTREAM_RESPONSES)
async def list_repositories(
    response: Response,
    use_case: BrowseRepoUseCase = Depends(get_use_case),
) -> RepositoriesResponse:
    """List every repository the token's user can access, newest first."""
    repos = await use_case.list_repositories()
    response.headers["Cache-Control"] = cache_control_header()
    return RepositoriesResponse(
        repositories=[
            RepositoryOut(id=r.id, name=r.name, full_name=r.full_name, private=r.private)
            for r in repos
        ],
        count=len(repos),
    )


@router.get(
    "/files",
    response_model=MarkdownFilesResponse,
    responses={400: _error("Missing or invalid owner / repo"), **_UPSTREAM_RESPONSES},
)
async def list_markdown_files(
    response: Response,
    owner: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    use_case: BrowseRepoUseCase = Depends(get_use_case),
) -> MarkdownFilesResponse:
    """List ``.md`` / ``.mdx`` files on the repository's default branch."""
    files = await use_case.list_markdown_files(owner, repo)
    response.headers["Cache-Control"] = cache_control_header()
    return MarkdownFilesResponse(
        owner=owner,
        repo=repo,
        files=[
            MarkdownFileOut(path=f.path, sha=f.sha, size=f.size, url=f.url) for f in files
        ],
        count=len(files),
    )


@router.get(
    "/content",
    response_model=FileContentResponse,
    responses={
        400: _error("Missing or invalid parameters"),
        422: _error("Path is not a file"),
        **_UPSTREAM_RESPONSES,
    },
)
async def get_file_content(
    response: Response,
    owner: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    path: str = Query(..., min_length=1),
    use_case: BrowseRepoUseCase = Depends(get_use_case),
) -> FileContentResponse:
    """Return the decoded text of one file."""
    content = await use_case.get_file_content(owner, repo, path)
    response.headers["Cache-Control"] = cache_control_header()
    return FileContentResponse(
        owner=owner,
        repo=repo,
        path=content.path,
        sha=content.sha,
        size=content.size,
        raw=content.raw,
    )


@router.get(
    "/tree",
    response_model=DirectoryResponse,
    responses={
        400: _error("Missing or invalid owner / repo"),
        422: _error("Path is not a directory"),
        **_UPSTREAM_RESPONSES,
    },
)
async def get_directory_contents(
    response: Response,
    owner: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    path: str = "",
    use_case: BrowseRepoUseCase = Depends(get_use_case),
) -> DirectoryResponse:
    """List the immediate children of a directory (repository root by default)."""
    entries = await use_case.get_directory_contents(owner, repo, path)
    response.headers["Cache-Control"] = cache_control_header()
    return DirectoryResponse(
        owner=owner,
        repo=repo,
        path=path,
        entries=[
            DirectoryEntryOut(
                name=e.name, path=e.path, type=e.type, sha=e.sha, size=e.size, url=e.url
            )
            for e in entries
        ],
        count=len(entries),
    )
