"""Tag the next release candidate and publish it as a draft pre-release.

The candidate commit is the head of the open release-please PR, or an
explicit ``--ref`` when the version is given on the command line. The tag
step and the release step are separate API writes; if a run dies between
them the next run finds the tag on the same commit and only publishes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relkit.core.result import Err, Ok, Result
from relkit.github.hosting import HostingProtocol
from relkit.output.console import Style
from relkit.release.context import WorkflowContext, report_dry_run, report_noop
from relkit.release.errors import ReleaseError
from relkit.release.graft import tag_commit
from relkit.release.guard import guard_release_candidate
from relkit.release.model import CreateReleaseCandidate, PullRequest, WorkflowOutcome
from relkit.release.publish import publish_release
from relkit.release.refs import resolve_ref
from relkit.release.tags import next_rc_number
from relkit.release.templates import release_candidate_body
from relkit.release.version import (
    parse_version,
    rc_tag_name,
    rc_tag_pattern,
    release_version_from_title,
)

PENDING_LABEL = "autorelease: pending"
_RELEASE_PR_TITLE_RE = re.compile(r"^chore\([^)]*\): release")


@dataclass(frozen=True, slots=True)
class Candidate:
    version: str
    commit_sha: str
    pr_number: int | None


def find_release_pr(prs: list[PullRequest]) -> PullRequest | None:
    """Labelled release-please PR first, then a title match."""
    for pr in prs:
        if PENDING_LABEL in pr.labels:
            return pr
    for pr in prs:
        if _RELEASE_PR_TITLE_RE.match(pr.title):
            return pr
    return None


def _release_pr(
    hosting: HostingProtocol, pr_number: int | None
) -> Result[PullRequest, ReleaseError]:
    if pr_number is not None:
        pr = hosting.get_pr(pr_number)
        if isinstance(pr, Err):
            return pr
        if pr.value is None:
            return Err(ReleaseError(kind="not_found", message=f"PR #{pr_number} not found"))
        return Ok(pr.value)

    prs = hosting.list_open_prs()
    if isinstance(prs, Err):
        return prs
    found = find_release_pr(prs.value)
    if found is None:
        return Err(
            ReleaseError(
                kind="not_found",
                message="no release-please PR found",
                hint=f"looked for the '{PENDING_LABEL}' label or a 'chore(...): release' title",
            )
        )
    return Ok(found)


def resolve_candidate(
    ctx: WorkflowContext, intent: CreateReleaseCandidate
) -> Result[Candidate, ReleaseError]:
    hosting = ctx.hosting

    if intent.version is not None:
        if parse_version(intent.version) is None:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"invalid version: {intent.version}",
                    hint="expected X.Y.Z",
                )
            )
        ref = intent.ref or ctx.config.branches.trunk
        sha = resolve_ref(hosting, ref)
        if isinstance(sha, Err):
            return sha
        ctx.console.print(f"candidate: {ref} at {sha.value[:7]}", Style.DIM)
        return Ok(
            Candidate(
                version=intent.version.removeprefix("v"),
                commit_sha=sha.value,
                pr_number=intent.pr_number,
            )
        )

    pr = _release_pr(hosting, intent.pr_number)
    if isinstance(pr, Err):
        return pr

    version = release_version_from_title(pr.value.title)
    if version is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"could not read a version from PR #{pr.value.number} title",
                hint=pr.value.title,
            )
        )

    ctx.console.print(f"release PR #{pr.value.number}: {pr.value.title}", Style.DIM)
    ctx.console.print(f"candidate: {pr.value.head_ref} at {pr.value.head_sha[:7]}", Style.DIM)
    return Ok(Candidate(version=version, commit_sha=pr.value.head_sha, pr_number=pr.value.number))


def create_release_candidate(
    ctx: WorkflowContext, intent: CreateReleaseCandidate
) -> Result[WorkflowOutcome, ReleaseError]:
    hosting = ctx.hosting
    console = ctx.console

    console.header(f"Create release candidate ({hosting.slug})")

    candidate = resolve_candidate(ctx, intent)
    if isinstance(candidate, Err):
        return candidate
    c = candidate.value

    tags = hosting.list_tags()
    if isinstance(tags, Err):
        return tags
    releases = hosting.list_releases()
    if isinstance(releases, Err):
        return releases

    verdict = guard_release_candidate(
        version=c.version,
        commit_sha=c.commit_sha,
        tags=tags.value,
        releases=releases.value,
    )
    if verdict.is_noop:
        return Ok(report_noop(ctx, verdict))

    if verdict.resume_tag is not None:
        tag = verdict.resume_tag
        console.info(verdict.reason)
        m = rc_tag_pattern(c.version).match(tag)
        rc_number = int(m.group(1)) if m is not None else 0
    else:
        rc_number = next_rc_number((t.name for t in tags.value), c.version)
        tag = rc_tag_name(c.version, rc_number)
    console.print(f"tag: {tag}", Style.DIM)

    body = release_candidate_body(
        version=c.version,
        rc_number=rc_number,
        slug=hosting.slug,
        pr_number=c.pr_number,
    )

    if ctx.dry_run:
        actions: list[str] = []
        if verdict.resume_tag is None:
            actions.append(f"Would create tag {tag} on {c.commit_sha[:7]}")
        actions.append(f"Would publish draft pre-release {tag}")
        return Ok(report_dry_run(ctx, actions))

    if verdict.resume_tag is None:
        created = tag_commit(hosting, version=c.version, rc_number=rc_number, commit_sha=c.commit_sha)
        if isinstance(created, Err):
            return created
        console.success(f"created tag {tag}")

    release = publish_release(hosting, tag=tag, body=body)
    if isinstance(release, Err):
        return release

    console.success(f"published draft pre-release {tag}")
    console.print(f"  {release.value.html_url}")
    return Ok(
        WorkflowOutcome(status="done", summary=f"released candidate {tag}", url=release.value.html_url)
    )
