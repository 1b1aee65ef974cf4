from __future__ import annotations

from relkit.core.result import Err, Ok
from relkit.release.context import WorkflowContext
from relkit.release.model import SyncReleaseBranchToMain
from relkit.release.sync import sync_release_branch

from ._fakes import FakeHosting, commit

_INTENT = SyncReleaseBranchToMain(tag="v1.15.1")
_MARKER = "chore: sync release/v1.15 at v1.15.1 to main"
_BRANCH = "sync/release-v1.15"


def _seed(hosting: FakeHosting) -> None:
    hosting.add_commit("main", commit("m1", "feat: trunk work (#20)", tree="T-main"))
    hosting.add_commit("release/v1.15", commit("r1", "chore: release 1.15.1 (#19)", tree="T-rel"))
    hosting.tags["v1.15.1"] = "r1"


def test_grafts_release_onto_trunk_and_opens_pr(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)

    result = sync_release_branch(ctx, _INTENT)

    assert isinstance(result, Ok)
    assert result.value.status == "done"
    names = [m[0] for m in hosting.mutations]
    assert names == ["create_commit", "create_ref", "create_pr"]
    assert hosting.mutations[0] == ("create_commit", _MARKER, "T-rel", "m1")

    graft = hosting.branches[_BRANCH]
    assert hosting.commits[graft].tree_sha == "T-rel"
    assert hosting.commits[graft].parents == ("m1",)
    assert hosting.mutations[2] == ("create_pr", _BRANCH, "main", _MARKER)


def test_rerun_with_fresh_pr_is_noop(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    assert isinstance(sync_release_branch(ctx, _INTENT), Ok)
    hosting.calls.clear()

    again = sync_release_branch(ctx, _INTENT)

    assert isinstance(again, Ok)
    assert again.value.status == "noop"
    assert hosting.mutations == []


def test_stale_pr_is_refreshed_in_place(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    assert isinstance(sync_release_branch(ctx, _INTENT), Ok)
    open_prs = len(hosting.prs)
    hosting.add_commit("release/v1.15", commit("r2", "fix: late fix (#21)", tree="T-rel2"))
    hosting.calls.clear()

    result = sync_release_branch(ctx, _INTENT)

    assert isinstance(result, Ok)
    assert result.value.status == "done"
    assert [m[0] for m in hosting.mutations] == ["create_commit", "update_ref"]
    assert hosting.commits[hosting.branches[_BRANCH]].tree_sha == "T-rel2"
    assert len(hosting.prs) == open_prs


def test_leftover_sync_branch_is_force_updated(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    hosting.branches[_BRANCH] = "old-sync"

    result = sync_release_branch(ctx, _INTENT)

    assert isinstance(result, Ok)
    assert [m[0] for m in hosting.mutations] == ["create_commit", "update_ref", "create_pr"]


def test_identical_trees_is_noop(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    hosting.add_commit("main", commit("m1", "chore: merge", tree="T-same"))
    hosting.add_commit("release/v1.15", commit("r1", "chore: release 1.15.1", tree="T-same"))
    hosting.tags["v1.15.1"] = "r1"

    result = sync_release_branch(ctx, _INTENT)

    assert isinstance(result, Ok)
    assert result.value.status == "noop"
    assert hosting.mutations == []


def test_marker_in_trunk_is_noop(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    hosting.add_commit("main", commit("m2", f"{_MARKER} (#22)", tree="T-main2"))

    result = sync_release_branch(ctx, _INTENT)

    assert isinstance(result, Ok)
    assert result.value.status == "noop"


def test_missing_release_branch(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    hosting.add_commit("main", commit("m1", "init"))
    result = sync_release_branch(ctx, _INTENT)
    assert isinstance(result, Err)
    assert result.error.kind == "not_found"


def test_unresolvable_tag(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    del hosting.tags["v1.15.1"]
    result = sync_release_branch(ctx, _INTENT)
    assert isinstance(result, Err)
    assert result.error.kind == "not_found"


def test_malformed_tag(ctx: WorkflowContext) -> None:
    result = sync_release_branch(ctx, SyncReleaseBranchToMain(tag="latest"))
    assert isinstance(result, Err)
    assert result.error.kind == "config"


def test_dry_run(dry_ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    result = sync_release_branch(dry_ctx, _INTENT)
    assert isinstance(result, Ok)
    assert result.value.status == "dry_run"
    assert hosting.mutations == []
