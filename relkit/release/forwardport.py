"""Bring a merged release-please PR from a release branch into trunk.

The PR's merge commit is cherry-picked onto a branch from trunk, then the
release branch is merged with the "ours" strategy. Trunk's files only change
by the cherry-pick, while release tags become reachable from trunk.
"""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.release.context import WorkflowContext, report_dry_run, report_noop
from relkit.release.errors import ReleaseError
from relkit.release.guard import guard_port
from relkit.release.model import Forwardport, PullRequest, WorkflowOutcome
from relkit.release.porting import prepare_branch, run_steps
from relkit.release.publish import publish_pr
from relkit.release.templates import forwardport_body, forwardport_branch, forwardport_marker


def _check_release_pr(pr: PullRequest, release_prefix: str) -> ReleaseError | None:
    if not pr.merged:
        return ReleaseError(
            kind="invalid_input",
            message=f"PR #{pr.number} is not merged",
            hint=pr.html_url,
        )
    if not pr.base_ref.startswith(release_prefix):
        return ReleaseError(
            kind="invalid_input",
            message=f"PR #{pr.number} targets {pr.base_ref}, not a release branch",
            hint=f"expected a base starting with {release_prefix}",
        )
    if not pr.merge_commit_sha:
        return ReleaseError(
            kind="invalid_input",
            message=f"PR #{pr.number} has no merge commit",
            hint=pr.html_url,
        )
    return None


def forwardport(ctx: WorkflowContext, intent: Forwardport) -> Result[WorkflowOutcome, ReleaseError]:
    hosting = ctx.hosting
    console = ctx.console
    cfg = ctx.config
    trunk = cfg.branches.trunk
    n = intent.pr_number

    console.header(f"Forwardport #{n} to {trunk} ({hosting.slug})")

    pr = hosting.get_pr(n)
    if isinstance(pr, Err):
        return pr
    if pr.value is None:
        return Err(ReleaseError(kind="not_found", message=f"PR #{n} not found"))
    original = pr.value

    invalid = _check_release_pr(original, cfg.branches.release_prefix)
    if invalid is not None:
        return Err(invalid)

    release_branch = original.base_ref
    merge_sha = original.merge_commit_sha or ""
    marker = forwardport_marker(n, trunk)
    branch = forwardport_branch(n, trunk)
    console.print(f"release branch: {release_branch}", Style.DIM)
    console.print(f"merge commit: {merge_sha[:7]}", Style.DIM)

    verdict = guard_port(
        hosting,
        destination=trunk,
        marker=marker,
        work_branch=branch,
        limits=cfg.history,
    )
    if isinstance(verdict, Err):
        return verdict
    if verdict.value.is_noop:
        return Ok(report_noop(ctx, verdict.value))

    if ctx.dry_run:
        return Ok(
            report_dry_run(
                ctx,
                [
                    f"Would create {branch} from {trunk}",
                    f"Would cherry-pick {merge_sha[:7]}",
                    f"Would merge {release_branch} with strategy ours",
                    f"Would push {branch}",
                    f"Would open PR {branch} -> {trunk}: {marker}",
                ],
            )
        )

    wc = ctx.require_working_copy()
    if isinstance(wc, Err):
        return wc
    w = wc.value

    steps = prepare_branch(w, identity=cfg.git, base_branch=trunk, new_branch=branch)
    steps.append((f"git fetch {release_branch}", lambda: w.fetch(release_branch)))
    steps.append((f"git cherry-pick {merge_sha[:7]}", lambda: w.cherry_pick(merge_sha)))
    steps.append(
        (
            f"git merge -s ours {release_branch}",
            lambda: w.merge_ours(w.remote_ref(release_branch), marker),
        )
    )
    steps.append((f"git push {branch}", lambda: w.push(branch)))
    ran = run_steps(steps, console)
    if isinstance(ran, Err):
        return ran

    opened = publish_pr(
        hosting,
        branch=branch,
        base=trunk,
        title=marker,
        body=forwardport_body(original, release_branch=release_branch, trunk=trunk),
    )
    if isinstance(opened, Err):
        return opened

    console.success(f"opened PR #{opened.value.number}")
    console.print(f"  {opened.value.html_url}")
    return Ok(
        WorkflowOutcome(
            status="done",
            summary=f"forwardported #{n} to {trunk}",
            url=opened.value.html_url,
        )
    )
