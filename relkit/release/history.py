"""Bounded commit-history search.

Markers are written shortly before anyone searches for them, so only the
most recent ``max_pages * page_size`` commits of a branch are scanned. An
older marker is reported as missing rather than paying for a full walk.
"""

from __future__ import annotations

from relkit.core.config import HistoryConfig
from relkit.core.result import Err, Ok, Result
from relkit.github.hosting import HostingProtocol
from relkit.release.errors import ReleaseError
from relkit.release.model import CommitInfo


def title_matches(commit: CommitInfo, pattern: str) -> bool:
    """Literal substring match against the first message line only."""
    return pattern in commit.title


def find_commit(
    hosting: HostingProtocol,
    *,
    branch: str,
    pattern: str,
    limits: HistoryConfig = HistoryConfig(),
) -> Result[CommitInfo | None, ReleaseError]:
    """Newest commit on ``branch`` whose title contains ``pattern``.

    Returns ``Ok(None)`` when nothing matches within the page ceiling.
    """
    for page in range(1, limits.max_pages + 1):
        commits = hosting.list_commits(branch, page=page, per_page=limits.page_size)
        if isinstance(commits, Err):
            return commits

        for commit in commits.value:
            if title_matches(commit, pattern):
                return Ok(commit)

        if len(commits.value) < limits.page_size:
            break

    return Ok(None)


def commit_exists(
    hosting: HostingProtocol,
    *,
    branch: str,
    pattern: str,
    limits: HistoryConfig = HistoryConfig(),
) -> Result[bool, ReleaseError]:
    found = find_commit(hosting, branch=branch, pattern=pattern, limits=limits)
    if isinstance(found, Err):
        return found
    return Ok(found.value is not None)
