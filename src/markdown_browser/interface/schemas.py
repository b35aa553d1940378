"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel


class RepositoryOut(BaseModel):
    id: int
    name: str
    full_name: str
    private: bool


class RepositoriesResponse(BaseModel):
    """Successful response from ``GET /api/github/repos``."""

    repositories: list[RepositoryOut]
    count: int


class MarkdownFileOut(BaseModel):
    path: str
    sha: str
    size: int
    url: str | None = None


class MarkdownFilesResponse(BaseModel):
    """Successful response from ``GET /api/github/files``."""

    owner: str
    repo: str
    files: list[MarkdownFileOut]
    count: int


class FileContentResponse(BaseModel):
    """Successful response from ``GET /api/github/content``."""

    owner: str
    repo: str
    path: str
    sha: str
    size: int
    raw: str


class DirectoryEntryOut(BaseModel):
    name: str
    path: str
    type: str
    sha: str
    size: int
    url: str | None = None


class DirectoryResponse(BaseModel):
    """Successful response from ``GET /api/github/tree``."""

    owner: str
    repo: str
    path: str
    entries: list[DirectoryEntryOut]
    count: int


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
    detail: str | None = None
