"""Hosting-platform boundary used by the release engine.

The engine only ever sees ``HostingProtocol``; ``GitHubClient`` implements it
over ``gh api`` and tests provide an in-memory implementation. Lookups that
can legitimately miss return ``Ok(None)``; every other failure is an ``Err``.
"""

from __future__ import annotations

from typing import Protocol

from relkit.core.result import Result
from relkit.release.errors import ReleaseError
from relkit.release.model import CommitInfo, PullRequest, Release, RepoTag

__all__ = ["HostingProtocol"]


class HostingProtocol(Protocol):
    """Read and mutate repository state on the hosting platform."""

    @property
    def slug(self) -> str:
        """``owner/name``."""
        ...

    @property
    def web_url(self) -> str: ...

    # Reads

    def get_branch_sha(self, branch: str) -> Result[str | None, ReleaseError]: ...

    def get_tag_commit_sha(self, tag: str) -> Result[str | None, ReleaseError]:
        """Commit a tag points at, peeling annotated tag objects."""
        ...

    def get_commit(self, ref: str) -> Result[CommitInfo | None, ReleaseError]: ...

    def list_commits(
        self, branch: str, *, page: int, per_page: int
    ) -> Result[list[CommitInfo], ReleaseError]:
        """One page of history, newest first."""
        ...

    def list_tags(self) -> Result[list[RepoTag], ReleaseError]: ...

    def list_releases(self) -> Result[list[Release], ReleaseError]: ...

    def list_open_prs(
        self, *, head: str | None = None, base: str | None = None
    ) -> Result[list[PullRequest], ReleaseError]: ...

    def get_pr(self, number: int) -> Result[PullRequest | None, ReleaseError]: ...

    def get_file_text(self, path: str, *, ref: str) -> Result[str | None, ReleaseError]: ...

    # Mutations

    def create_ref(self, ref: str, sha: str) -> Result[None, ReleaseError]:
        """Create ``refs/...``; fails if it already exists."""
        ...

    def update_ref(self, ref: str, sha: str) -> Result[None, ReleaseError]:
        """Force-update ``refs/...`` to ``sha``."""
        ...

    def create_tag_object(
        self, *, tag: str, message: str, commit_sha: str
    ) -> Result[str, ReleaseError]: ...

    def create_commit(
        self, *, message: str, tree_sha: str, parents: list[str]
    ) -> Result[str, ReleaseError]: ...

    def create_pr(
        self, *, head: str, base: str, title: str, body: str
    ) -> Result[PullRequest, ReleaseError]: ...

    def create_release(
        self, *, tag: str, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[Release, ReleaseError]: ...
