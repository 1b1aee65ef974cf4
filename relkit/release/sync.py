"""Squash a release branch's content onto trunk through a sync PR.

The sync branch ``sync/release-vX.Y`` is a dedicated pointer that later syncs
of the same line force-update, so an open sync PR is refreshed in place
rather than duplicated.
"""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.github.hosting import HostingProtocol
from relkit.output.console import Style
from relkit.release.context import WorkflowContext, report_dry_run, report_noop
from relkit.release.errors import ReleaseError
from relkit.release.graft import squash_graft
from relkit.release.guard import guard_sync
from relkit.release.model import CommitInfo, SyncReleaseBranchToMain, WorkflowOutcome
from relkit.release.publish import publish_pr
from relkit.release.refs import resolve_ref
from relkit.release.templates import sync_body, sync_branch, sync_marker
from relkit.release.version import major_minor


def _branch_head(hosting: HostingProtocol, branch: str) -> Result[CommitInfo, ReleaseError]:
    sha = hosting.get_branch_sha(branch)
    if isinstance(sha, Err):
        return sha
    if sha.value is None:
        return Err(ReleaseError(kind="not_found", message=f"branch {branch} does not exist"))

    commit = hosting.get_commit(sha.value)
    if isinstance(commit, Err):
        return commit
    if commit.value is None or not commit.value.tree_sha:
        return Err(
            ReleaseError(kind="not_found", message=f"head commit of {branch} not found", hint=sha.value)
        )
    return Ok(commit.value)


def sync_release_branch(
    ctx: WorkflowContext, intent: SyncReleaseBranchToMain
) -> Result[WorkflowOutcome, ReleaseError]:
    hosting = ctx.hosting
    console = ctx.console
    cfg = ctx.config
    trunk = cfg.branches.trunk

    console.header(f"Sync release branch for {intent.tag} ({hosting.slug})")

    mm = major_minor(intent.tag)
    if isinstance(mm, Err):
        return mm

    release_branch = cfg.branches.release_branch(mm.value)
    branch = sync_branch(mm.value)
    marker = sync_marker(release_branch, intent.tag, trunk)

    release_head = _branch_head(hosting, release_branch)
    if isinstance(release_head, Err):
        return release_head

    tag_sha = resolve_ref(hosting, intent.tag)
    if isinstance(tag_sha, Err):
        return tag_sha

    trunk_head = _branch_head(hosting, trunk)
    if isinstance(trunk_head, Err):
        return trunk_head

    release_tree = release_head.value.tree_sha or ""
    console.print(f"release branch: {release_branch} at {release_head.value.short_sha}", Style.DIM)
    console.print(f"tag {intent.tag}: {tag_sha.value[:7]}", Style.DIM)
    console.print(f"sync branch: {branch}", Style.DIM)

    verdict = guard_sync(
        hosting,
        trunk=trunk,
        sync_branch=branch,
        marker=marker,
        release_tree=release_tree,
        trunk_tree=trunk_head.value.tree_sha or "",
        limits=cfg.history,
    )
    if isinstance(verdict, Err):
        return verdict
    if verdict.value.is_noop:
        return Ok(report_noop(ctx, verdict.value))
    open_pr = verdict.value.open_pr

    if ctx.dry_run:
        actions = [f"Would graft {release_branch} content onto {trunk} as '{marker}'"]
        if open_pr is not None:
            actions.append(f"Would force-update {branch} for open PR #{open_pr.number}")
        else:
            actions.append(f"Would point {branch} at the graft")
            actions.append(f"Would open PR {branch} -> {trunk}: {marker}")
        return Ok(report_dry_run(ctx, actions))

    grafted = squash_graft(
        hosting,
        source_sha=release_head.value.sha,
        dest_sha=trunk_head.value.sha,
        message=marker,
    )
    if isinstance(grafted, Err):
        return grafted
    console.success(f"grafted {grafted.value[:7]} onto {trunk}")

    ref = f"refs/heads/{branch}"
    if open_pr is not None:
        moved = hosting.update_ref(ref, grafted.value)
        if isinstance(moved, Err):
            return moved
        console.success(f"refreshed PR #{open_pr.number}")
        console.print(f"  {open_pr.html_url}")
        return Ok(
            WorkflowOutcome(
                status="done",
                summary=f"refreshed sync PR #{open_pr.number}",
                url=open_pr.html_url,
            )
        )

    existing = hosting.get_branch_sha(branch)
    if isinstance(existing, Err):
        return existing
    if existing.value is None:
        pointed = hosting.create_ref(ref, grafted.value)
    else:
        pointed = hosting.update_ref(ref, grafted.value)
    if isinstance(pointed, Err):
        return pointed

    opened = publish_pr(
        hosting,
        branch=branch,
        base=trunk,
        title=marker,
        body=sync_body(release_branch=release_branch, tag=intent.tag, branch=branch, trunk=trunk),
    )
    if isinstance(opened, Err):
        return opened

    console.success(f"opened PR #{opened.value.number}")
    console.print(f"  {opened.value.html_url}")
    return Ok(
        WorkflowOutcome(
            status="done",
            summary=f"opened sync PR #{opened.value.number}",
            url=opened.value.html_url,
        )
    )
