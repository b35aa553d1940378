"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class MarkdownBrowserError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(MarkdownBrowserError):
    """A required configuration value is missing or empty."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required configuration value: {name}")
        self.name = name


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryError(MarkdownBrowserError):
    """The supplied owner / repository name is not a valid GitHub identifier."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class UpstreamError(MarkdownBrowserError):
    """Any failed call to the GitHub API (network, non-2xx, bad payload)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RepositoryNotFoundError(UpstreamError):
    """The repository or path does not exist or is not accessible (404)."""


class RepositoryAccessDeniedError(UpstreamError):
    """Access to the repository was denied (401 / 403)."""


class GitHubRateLimitError(UpstreamError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


# ── Content shape errors ────────────────────────────────────────────────────


class NotAFileError(MarkdownBrowserError):
    """A file was requested but the path resolved to something else."""


class NotADirectoryError(MarkdownBrowserError):  # noqa: A001
    """A directory listing was requested but the path resolved to a file."""
