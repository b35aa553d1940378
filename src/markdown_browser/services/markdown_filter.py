"""Markdown filtering — decide which tree entries are markdown documents."""

from __future__ import annotations

from typing import Any, Iterable

MARKDOWN_EXTENSIONS: tuple[str, ...] = (".md", ".mdx")


def is_markdown_path(path: str) -> bool:
    """Return *True* if *path* ends in ``.md`` or ``.mdx`` (any case)."""
    return path.lower().endswith(MARKDOWN_EXTENSIONS)


def is_markdown_blob(entry: Any) -> bool:
    """Return *True* for a tree entry that is a file with a markdown path."""
    if not isinstance(entry, dict):
        return False
    if entry.get("type") != "blob":
        return False
    path = entry.get("path")
    if not isinstance(path, str) or not path:
        return False
    return is_markdown_path(path)


def filter_markdown(entries: Iterable[Any]) -> list[dict[str, Any]]:
    """Keep markdown blobs, preserving the provider's order."""
    return [entry for entry in entries if is_markdown_blob(entry)]
