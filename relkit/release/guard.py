"""Idempotency decisions.

Before any mutation a workflow asks whether its intent is already fulfilled.
Checks run in a fixed order and the first one that fires decides:

1. the target ref already exists (branch/tag creation intents);
2. the durable marker commit is already in the destination history;
3. an open PR already covers the same head -> base pair;
4. the working branch already exists upstream (another run started it).

The marker is checked before branch existence: a merged PR's branch may be
deleted while the marker stays in history for good.

``branch_in_progress`` is a heuristic. Two runs started at the same moment
can both see "no branch" and race. Nothing locks.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from relkit.core.config import HistoryConfig
from relkit.core.result import Err, Ok, Result
from relkit.github.hosting import HostingProtocol
from relkit.release.errors import ReleaseError
from relkit.release.history import find_commit
from relkit.release.model import PullRequest, Release, RepoTag
from relkit.release.tags import rc_tags_for_version

Decision = Literal["already_satisfied", "branch_in_progress", "proceed"]


@dataclass(frozen=True, slots=True)
class Verdict:
    decision: Decision
    reason: str
    url: str | None = None
    # Set when an earlier run got partway: the RC tag exists, its release does not.
    resume_tag: str | None = None
    # Set when an open PR should be refreshed rather than duplicated.
    open_pr: PullRequest | None = None

    @property
    def is_noop(self) -> bool:
        return self.decision != "proceed"


PROCEED = Verdict(decision="proceed", reason="no prior state found")

Check = Callable[[], Result[Verdict | None, ReleaseError]]


def first_verdict(checks: Sequence[Check]) -> Result[Verdict, ReleaseError]:
    """Run ``checks`` in order; the first non-None verdict wins."""
    for check in checks:
        result = check()
        if isinstance(result, Err):
            return result
        if result.value is not None:
            return Ok(result.value)
    return Ok(PROCEED)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def branch_already_exists(hosting: HostingProtocol, branch: str) -> Check:
    def check() -> Result[Verdict | None, ReleaseError]:
        sha = hosting.get_branch_sha(branch)
        if isinstance(sha, Err):
            return sha
        if sha.value is None:
            return Ok(None)
        return Ok(
            Verdict(
                decision="already_satisfied",
                reason=f"branch {branch} already exists",
                url=f"{hosting.web_url}/tree/{branch}",
            )
        )

    return check


def marker_in_history(
    hosting: HostingProtocol,
    *,
    branch: str,
    marker: str,
    limits: HistoryConfig,
) -> Check:
    def check() -> Result[Verdict | None, ReleaseError]:
        found = find_commit(hosting, branch=branch, pattern=marker, limits=limits)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Ok(None)
        return Ok(
            Verdict(
                decision="already_satisfied",
                reason=f"found commit {found.value.short_sha} with {marker!r} in {branch}",
                url=f"{hosting.web_url}/commit/{found.value.sha}",
            )
        )

    return check


def open_pr_exists(hosting: HostingProtocol, *, head: str, base: str) -> Check:
    def check() -> Result[Verdict | None, ReleaseError]:
        prs = hosting.list_open_prs(head=head, base=base)
        if isinstance(prs, Err):
            return prs
        if not prs.value:
            return Ok(None)
        pr = prs.value[0]
        return Ok(
            Verdict(
                decision="already_satisfied",
                reason=f"PR #{pr.number} ({head} -> {base}) is already open",
                url=pr.html_url,
                open_pr=pr,
            )
        )

    return check


def working_branch_exists(hosting: HostingProtocol, branch: str) -> Check:
    def check() -> Result[Verdict | None, ReleaseError]:
        sha = hosting.get_branch_sha(branch)
        if isinstance(sha, Err):
            return sha
        if sha.value is None:
            return Ok(None)
        return Ok(
            Verdict(
                decision="branch_in_progress",
                reason=f"branch {branch} already exists upstream",
                url=f"{hosting.web_url}/tree/{branch}",
            )
        )

    return check


# ---------------------------------------------------------------------------
# Per-intent guards
# ---------------------------------------------------------------------------


def guard_release_branch(hosting: HostingProtocol, branch: str) -> Result[Verdict, ReleaseError]:
    return first_verdict([branch_already_exists(hosting, branch)])


def guard_port(
    hosting: HostingProtocol,
    *,
    destination: str,
    marker: str,
    work_branch: str,
    limits: HistoryConfig,
) -> Result[Verdict, ReleaseError]:
    """Backport / forwardport: marker, then open PR, then working branch."""
    return first_verdict(
        [
            marker_in_history(hosting, branch=destination, marker=marker, limits=limits),
            open_pr_exists(hosting, head=work_branch, base=destination),
            working_branch_exists(hosting, work_branch),
        ]
    )


def guard_release_candidate(
    *,
    version: str,
    commit_sha: str,
    tags: Sequence[RepoTag],
    releases: Sequence[Release],
) -> Verdict:
    """Decide from already-drained tag and release listings.

    An RC tag of ``version`` already on ``commit_sha`` means this commit was
    tagged before. With a release for that tag the intent is done; without
    one the run resumes at publishing.
    """
    existing = [tag for _, tag in rc_tags_for_version(tags, version) if tag.commit_sha == commit_sha]
    if not existing:
        return PROCEED

    tag = existing[-1]
    release = next((r for r in releases if r.tag == tag.name), None)
    if release is not None:
        return Verdict(
            decision="already_satisfied",
            reason=f"{tag.name} already tags {commit_sha[:7]} and has a release",
            url=release.html_url or None,
        )
    return Verdict(
        decision="proceed",
        reason=f"{tag.name} already tags {commit_sha[:7]} but has no release",
        resume_tag=tag.name,
    )


def guard_sync(
    hosting: HostingProtocol,
    *,
    trunk: str,
    sync_branch: str,
    marker: str,
    release_tree: str,
    trunk_tree: str,
    limits: HistoryConfig,
) -> Result[Verdict, ReleaseError]:
    """Sync: marker, identical trees, then the open sync PR's freshness."""
    marker_check = marker_in_history(hosting, branch=trunk, marker=marker, limits=limits)()
    if isinstance(marker_check, Err):
        return marker_check
    if marker_check.value is not None:
        return Ok(marker_check.value)

    if release_tree == trunk_tree:
        return Ok(
            Verdict(
                decision="already_satisfied",
                reason=f"{trunk} already has the release branch content",
            )
        )

    pr_check = open_pr_exists(hosting, head=sync_branch, base=trunk)()
    if isinstance(pr_check, Err):
        return pr_check
    verdict = pr_check.value
    if verdict is None:
        return Ok(PROCEED)

    head = hosting.get_commit(sync_branch)
    if isinstance(head, Err):
        return head
    if head.value is not None and head.value.tree_sha == release_tree:
        return Ok(verdict)

    return Ok(
        Verdict(
            decision="proceed",
            reason=f"{verdict.reason} but its content is stale",
            url=verdict.url,
            open_pr=verdict.open_pr,
        )
    )
