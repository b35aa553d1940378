"""Tests for the browse-repository use case."""

from __future__ import annotations

import asyncio

import pytest

from markdown_browser.domain.exceptions import (
    InvalidRepositoryError,
    NotAFileError,
    UpstreamError,
)
from markdown_browser.domain.value_objects import RepoRef
from markdown_browser.services.browse_repo import BrowseRepoUseCase
from markdown_browser.services.ttl_cache import TtlCache


def test_operations_delegate_without_cache(browser) -> None:
    use_case = BrowseRepoUseCase(browser)

    repos = asyncio.run(use_case.list_repositories())
    asyncio.run(use_case.list_repositories())
    files = asyncio.run(use_case.list_markdown_files(" octo ", "docs"))
    content = asyncio.run(use_case.get_file_content("octo", "docs", "/README.md"))
    entries = asyncio.run(use_case.get_directory_contents("octo", "docs"))

    assert [r.full_name for r in repos] == ["octo/docs", "octo/notes"]
    assert [f.path for f in files] == ["README.md", "docs/guide.mdx"]
    assert content.raw == "# Docs\n"
    assert [e.type for e in entries] == ["file", "dir"]
    assert browser.calls == [
        ("repos",),
        ("repos",),
        ("files", RepoRef("octo", "docs")),
        ("content", RepoRef("octo", "docs"), "README.md"),
        ("dir", RepoRef("octo", "docs"), ""),
    ]


def test_cache_is_used_when_supplied(browser) -> None:
    use_case = BrowseRepoUseCase(browser, cache=TtlCache(), cache_ttl=60)

    first = asyncio.run(use_case.list_markdown_files("octo", "docs"))
    second = asyncio.run(use_case.list_markdown_files("octo", "docs"))
    asyncio.run(use_case.get_file_content("octo", "docs", "README.md"))
    asyncio.run(use_case.get_file_content("octo", "docs", "README.md"))

    assert first == second
    assert [c[0] for c in browser.calls] == ["files", "content"]


def test_failures_are_not_cached(browser) -> None:
    cache = TtlCache()
    use_case = BrowseRepoUseCase(browser, cache=cache)
    browser.error = UpstreamError("boom", status_code=502)

    with pytest.raises(UpstreamError):
        asyncio.run(use_case.list_repositories())

    browser.error = None
    repos = asyncio.run(use_case.list_repositories())

    assert len(repos) == 2
    assert len(cache) == 1


@pytest.mark.parametrize(
    ("owner", "repo"),
    [("", "docs"), ("octo", ""), ("-octo", "docs"), ("octo", ".."), ("oc/to", "docs"), ("octo", "a b")],
)
def test_invalid_repository_rejected_before_upstream(browser, owner, repo) -> None:
    use_case = BrowseRepoUseCase(browser)

    with pytest.raises(InvalidRepositoryError):
        asyncio.run(use_case.list_markdown_files(owner, repo))

    assert browser.calls == []


def test_blank_file_path_rejected(browser) -> None:
    use_case = BrowseRepoUseCase(browser)

    with pytest.raises(NotAFileError):
        asyncio.run(use_case.get_file_content("octo", "docs", " / "))

    assert browser.calls == []


def test_cached_lists_are_not_shared_between_callers(browser) -> None:
    use_case = BrowseRepoUseCase(browser, cache=TtlCache(), cache_ttl=60)

    first = asyncio.run(use_case.list_repositories())
    first.clear()
    second = asyncio.run(use_case.list_repositories())
    second.append("junk")
    third = asyncio.run(use_case.list_repositories())

    assert [r.full_name for r in third] == ["octo/docs", "octo/notes"]
    assert browser.calls == [("repos",)]


@pytest.mark.parametrize("owner", ["octo", "alice_acme", "A1-b2"])
def test_valid_owner_logins_accepted(owner) -> None:
    assert RepoRef.from_parts(owner, "docs").owner == owner
