"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """One repository visible to the authenticated user."""

    id: int
    name: str
    full_name: str
    private: bool


@dataclass(frozen=True, slots=True)
class MarkdownFile:
    """A markdown blob found in a repository's default-branch tree."""

    path: str
    sha: str
    size: int = 0
    url: str | None = None


@dataclass(frozen=True, slots=True)
class FileContent:
    """A fetched file with its decoded content."""

    path: str
    sha: str
    size: int
    raw: str


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """An immediate child of a repository directory."""

    name: str
    path: str
    type: str  # "file", "dir", "symlink" or "submodule"
    sha: str
    size: int = 0
    url: str | None = None
