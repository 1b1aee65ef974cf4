"""Cut the next ``release/vX.Y`` branch from the manifest version."""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.output.console import Style
from relkit.release.context import WorkflowContext, report_dry_run, report_noop
from relkit.release.errors import ReleaseError
from relkit.release.guard import guard_release_branch
from relkit.release.manifest import read_manifest_version
from relkit.release.model import CreateReleaseBranch, WorkflowOutcome
from relkit.release.refs import resolve_ref
from relkit.release.version import next_minor


def create_release_branch(
    ctx: WorkflowContext, intent: CreateReleaseBranch
) -> Result[WorkflowOutcome, ReleaseError]:
    hosting = ctx.hosting
    console = ctx.console
    source = intent.source_ref or ctx.config.branches.trunk

    console.header(f"Create release branch ({hosting.slug})")

    version = read_manifest_version(hosting, ref=source, manifest=ctx.config.manifest)
    if isinstance(version, Err):
        return version

    minor = next_minor(version.value)
    if isinstance(minor, Err):
        return minor

    branch = ctx.config.branches.release_branch(minor.value)
    console.print(f"manifest version at {source}: {version.value}", Style.DIM)
    console.print(f"release branch: {branch}", Style.DIM)

    verdict = guard_release_branch(hosting, branch)
    if isinstance(verdict, Err):
        return verdict
    if verdict.value.is_noop:
        return Ok(report_noop(ctx, verdict.value))

    sha = resolve_ref(hosting, source)
    if isinstance(sha, Err):
        return sha

    url = f"{hosting.web_url}/tree/{branch}"
    if ctx.dry_run:
        return Ok(
            report_dry_run(ctx, [f"Would create {branch} from {source} at {sha.value[:7]}"], url=url)
        )

    created = hosting.create_ref(f"refs/heads/{branch}", sha.value)
    if isinstance(created, Err):
        return created

    console.success(f"created {branch} at {sha.value[:7]}")
    console.print(f"  {url}")
    return Ok(WorkflowOutcome(status="done", summary=f"created {branch}", url=url))
