"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "...", "detail": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from markdown_browser.domain.exceptions import (
    ConfigurationError,
    GitHubRateLimitError,
    InvalidRepositoryError,
    MarkdownBrowserError,
    NotADirectoryError,
    NotAFileError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[MarkdownBrowserError], int, str]] = [
    (ConfigurationError, 500, "Server is not configured"),
    (InvalidRepositoryError, 400, "Invalid repository"),
    (RepositoryNotFoundError, 404, "Repository or path not found"),
    (RepositoryAccessDeniedError, 403, "Access denied by GitHub"),
    (GitHubRateLimitError, 429, "GitHub API rate limit exceeded"),
    (UpstreamError, 502, "GitHub API request failed"),
    (NotAFileError, 422, "Path is not a file"),
    (NotADirectoryError, 422, "Path is not a directory"),
]


def _error_json(status_code: int, message: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, "detail": detail},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code, message in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int, generic: str
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, generic, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code, message))

    # ── Query-parameter validation errors ───────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(400, "Invalid request parameters", "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
