"""Dispatch a ``ReleaseIntent`` to its workflow."""

from __future__ import annotations

from relkit.core.result import Result
from relkit.release.backport import backport
from relkit.release.context import WorkflowContext
from relkit.release.errors import ReleaseError
from relkit.release.forwardport import forwardport
from relkit.release.model import (
    Backport,
    CreateReleaseBranch,
    CreateReleaseCandidate,
    Forwardport,
    ReleaseIntent,
    SyncReleaseBranchToMain,
    WorkflowOutcome,
)
from relkit.release.rc import create_release_candidate
from relkit.release.release_branch import create_release_branch
from relkit.release.sync import sync_release_branch


def run_intent(ctx: WorkflowContext, intent: ReleaseIntent) -> Result[WorkflowOutcome, ReleaseError]:
    match intent:
        case CreateReleaseCandidate():
            return create_release_candidate(ctx, intent)
        case CreateReleaseBranch():
            return create_release_branch(ctx, intent)
        case Backport():
            return backport(ctx, intent)
        case Forwardport():
            return forwardport(ctx, intent)
        case SyncReleaseBranchToMain():
            return sync_release_branch(ctx, intent)
