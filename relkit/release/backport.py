"""Cherry-pick a merged trunk PR onto a release branch and open a PR."""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.release.context import WorkflowContext, report_dry_run, report_noop
from relkit.release.errors import ReleaseError
from relkit.release.guard import guard_port
from relkit.release.history import find_commit
from relkit.release.model import Backport, WorkflowOutcome
from relkit.release.porting import prepare_branch, run_steps
from relkit.release.publish import publish_pr
from relkit.release.templates import (
    backport_body,
    backport_branch,
    backport_marker,
    pr_number_marker,
)


def backport(ctx: WorkflowContext, intent: Backport) -> Result[WorkflowOutcome, ReleaseError]:
    hosting = ctx.hosting
    console = ctx.console
    cfg = ctx.config
    n = intent.pr_number

    console.header(f"Backport #{n} to {intent.target_version} ({hosting.slug})")

    target = cfg.branches.release_branch(intent.target_version.removeprefix("v"))
    target_sha = hosting.get_branch_sha(target)
    if isinstance(target_sha, Err):
        return target_sha
    if target_sha.value is None:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"release branch {target} does not exist",
                hint="create it first with create-release-branch",
            )
        )

    marker = backport_marker(n)
    branch = backport_branch(n, intent.target_version)
    console.print(f"target: {target}", Style.DIM)
    console.print(f"branch: {branch}", Style.DIM)

    verdict = guard_port(
        hosting,
        destination=target,
        marker=marker,
        work_branch=branch,
        limits=cfg.history,
    )
    if isinstance(verdict, Err):
        return verdict
    if verdict.value.is_noop:
        return Ok(report_noop(ctx, verdict.value))

    pr = hosting.get_pr(n)
    if isinstance(pr, Err):
        return pr
    if pr.value is None:
        return Err(ReleaseError(kind="not_found", message=f"PR #{n} not found"))
    original = pr.value

    commit = find_commit(
        hosting,
        branch=cfg.branches.trunk,
        pattern=pr_number_marker(n),
        limits=cfg.history,
    )
    if isinstance(commit, Err):
        return commit
    if commit.value is None:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"no commit for #{n} found on {cfg.branches.trunk}",
                hint=f"looked for '{pr_number_marker(n)}' in recent commit titles",
            )
        )
    sha = commit.value.sha
    console.print(f"commit: {commit.value.short_sha} {commit.value.title}", Style.DIM)

    if ctx.dry_run:
        return Ok(
            report_dry_run(
                ctx,
                [
                    f"Would create {branch} from {target}",
                    f"Would cherry-pick {sha[:7]}",
                    f"Would push {branch}",
                    f"Would open PR {branch} -> {target}: {marker}",
                ],
            )
        )

    wc = ctx.require_working_copy()
    if isinstance(wc, Err):
        return wc
    w = wc.value

    steps = prepare_branch(w, identity=cfg.git, base_branch=target, new_branch=branch)
    steps.append((f"git cherry-pick {sha[:7]}", lambda: w.cherry_pick(sha)))
    steps.append((f"git push {branch}", lambda: w.push(branch)))
    ran = run_steps(steps, console)
    if isinstance(ran, Err):
        return ran

    opened = publish_pr(
        hosting,
        branch=branch,
        base=target,
        title=marker,
        body=backport_body(original, target_branch=target),
    )
    if isinstance(opened, Err):
        return opened

    console.success(f"opened PR #{opened.value.number}")
    console.print(f"  {opened.value.html_url}")
    return Ok(
        WorkflowOutcome(
            status="done",
            summary=f"backported #{n} to {target}",
            url=opened.value.html_url,
        )
    )
