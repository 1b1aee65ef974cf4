from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True, slots=True)
class CommitInfo:
    sha: str
    message: str
    tree_sha: str | None = None
    parents: tuple[str, ...] = ()

    @property
    def title(self) -> str:
        """First line of the message; markers are only ever matched here."""
        return self.message.split("\n", 1)[0]

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True, slots=True)
class RepoTag:
    name: str
    # Peeled commit the tag points at.
    commit_sha: str


@dataclass(frozen=True, slots=True)
class PullRequest:
    number: int
    title: str
    body: str
    author: str
    head_ref: str
    head_sha: str
    base_ref: str
    state: str  # open | closed
    merged: bool
    merge_commit_sha: str | None
    html_url: str
    labels: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Release:
    tag: str
    html_url: str
    draft: bool
    prerelease: bool


# Intents: what a single workflow run is trying to achieve.


@dataclass(frozen=True, slots=True)
class CreateReleaseCandidate:
    """Tag the release-please PR head (or an explicit ref) as the next RC."""

    version: str | None = None
    ref: str | None = None
    pr_number: int | None = None


@dataclass(frozen=True, slots=True)
class CreateReleaseBranch:
    source_ref: str | None = None


@dataclass(frozen=True, slots=True)
class Backport:
    pr_number: int
    # "v1.15"
    target_version: str


@dataclass(frozen=True, slots=True)
class Forwardport:
    pr_number: int


@dataclass(frozen=True, slots=True)
class SyncReleaseBranchToMain:
    tag: str


ReleaseIntent = (
    CreateReleaseCandidate
    | CreateReleaseBranch
    | Backport
    | Forwardport
    | SyncReleaseBranchToMain
)


OutcomeStatus = Literal["done", "noop", "dry_run"]


@dataclass(frozen=True, slots=True)
class WorkflowOutcome:
    """What a workflow run ended up doing."""

    status: OutcomeStatus
    summary: str
    url: str | None = None
    details: tuple[str, ...] = field(default_factory=tuple)

    @property
    def mutated(self) -> bool:
        return self.status == "done"
