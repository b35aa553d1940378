"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from markdown_browser.domain.exceptions import InvalidRepositoryError

_OWNER_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9_-]{0,38})$")
_REPO_RE = re.compile(r"^[A-Za-z0-9._-]{1,100}$")


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Validated ``owner/repo`` pair.

    Rejects anything GitHub would not accept as a user / organisation login
    or repository name, so that the values can be interpolated into API
    paths safely.
    """

    owner: str
    repo: str

    @classmethod
    def from_parts(cls, owner: str, repo: str) -> RepoRef:
        """Strip and validate raw owner / repository strings."""
        owner = owner.strip()
        repo = repo.strip()
        if not _OWNER_RE.match(owner):
            raise InvalidRepositoryError(f"Invalid repository owner: '{owner}'.")
        if not _REPO_RE.match(repo) or repo in {".", ".."}:
            raise InvalidRepositoryError(f"Invalid repository name: '{repo}'.")
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
