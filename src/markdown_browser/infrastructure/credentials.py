"""Credential resolution against process configuration."""

from __future__ import annotations

from pydantic import SecretStr

from markdown_browser.domain.exceptions import ConfigurationError
from markdown_browser.infrastructure.config import Settings, get_settings

DEFAULT_CREDENTIAL = "GITHUB_PAT"


def resolve_credential(
    name: str = DEFAULT_CREDENTIAL, settings: Settings | None = None
) -> str:
    """Return the secret stored under *name*, or raise ``ConfigurationError``.

    *name* is the environment variable name; it is looked up as the matching
    lower-case field of :class:`Settings`, so ``.env`` files work as well.
    """
    settings = settings or get_settings()
    value = getattr(settings, name.lower(), None)
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(name)
    return value.strip()
