"""Port: repository browser — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from markdown_browser.domain.entities import (
    DirectoryEntry,
    FileContent,
    MarkdownFile,
    RepositorySummary,
)
from markdown_browser.domain.value_objects import RepoRef


class RepoBrowser(Protocol):
    """Abstract contract for reading repository data from GitHub."""

    async def list_repositories(self) -> list[RepositorySummary]:
        """Return every repository of the authenticated user, newest first."""
        ...

    async def list_markdown_files(self, ref: RepoRef) -> list[MarkdownFile]:
        """Return the markdown blobs on the repository's default branch."""
        ...

    async def get_file_content(self, ref: RepoRef, path: str) -> FileContent:
        """Return the decoded text content of a single file."""
        ...

    async def get_directory_contents(
        self, ref: RepoRef, path: str = ""
    ) -> list[DirectoryEntry]:
        """Return the immediate children of a directory."""
        ...
