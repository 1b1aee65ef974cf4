"""PR titles, markers and bodies.

Markers double as PR titles and are what later runs search history for, so
their wording must stay stable across releases.
"""

from __future__ import annotations

from relkit.release.model import PullRequest

_FOOTER = "*Created automatically by relkit.*"


def backport_marker(pr_number: int) -> str:
    return f"chore: backport #{pr_number}"


def backport_branch(pr_number: int, target_version: str) -> str:
    """``42``, ``v1.15`` -> ``backport/pr-42-to-v1.15``."""
    return f"backport/pr-{pr_number}-to-{target_version}"


def forwardport_marker(pr_number: int, trunk: str) -> str:
    return f"chore: forwardport release-please #{pr_number} to {trunk}"


def forwardport_branch(pr_number: int, trunk: str) -> str:
    return f"forwardport/pr-{pr_number}-to-{trunk}"


def sync_marker(release_branch: str, tag: str, trunk: str) -> str:
    return f"chore: sync {release_branch} at {tag} to {trunk}"


def sync_branch(major_minor: str) -> str:
    return f"sync/release-v{major_minor}"


def pr_number_marker(pr_number: int) -> str:
    """Suffix squash merges append to the trunk commit title."""
    return f"(#{pr_number})"


def pr_url(slug: str, number: int) -> str:
    return f"https://github.com/{slug}/pull/{number}"


def _original_pr_lines(pr: PullRequest) -> list[str]:
    lines = [
        "### Original PR",
        f"- **Title:** {pr.title}",
        f"- **Author:** @{pr.author}",
    ]
    return lines


def _render(lines: list[str]) -> str:
    return "\n".join(lines).rstrip() + "\n"


def backport_body(pr: PullRequest, *, target_branch: str) -> str:
    lines = [f"## Backport of #{pr.number}", ""]
    lines.append(f"Backports #{pr.number} to `{target_branch}`.")
    lines.append("")
    lines.extend(_original_pr_lines(pr))
    lines.append("")
    lines.append("### Description")
    lines.append(pr.body.rstrip() if pr.body.strip() else "_No description._")
    lines.append("")
    lines.append("---")
    lines.append(_FOOTER)
    return _render(lines)


def forwardport_body(pr: PullRequest, *, release_branch: str, trunk: str) -> str:
    lines = [f"## Forwardport of #{pr.number} to {trunk}", ""]
    lines.append(
        f"Brings the release commit of #{pr.number} from `{release_branch}` into `{trunk}`."
    )
    lines.append("")
    lines.extend(_original_pr_lines(pr))
    lines.append("")
    lines.append("### Merge strategy")
    lines.append(
        f"`{release_branch}` is recorded as merged so its tags are reachable from "
        f"`{trunk}`; only the cherry-picked changes alter files."
    )
    lines.append("Merge with a **merge commit**, not squash or rebase.")
    lines.append("")
    lines.append("---")
    lines.append(_FOOTER)
    return _render(lines)


def sync_body(*, release_branch: str, tag: str, branch: str, trunk: str) -> str:
    lines = [f"## Sync {release_branch} at {tag}", ""]
    lines.append(f"Carries the content of `{release_branch}` at `{tag}` into `{trunk}`.")
    lines.append("")
    lines.append(
        f"The head branch `{branch}` is reused and force-updated by later syncs; "
        "do not push to it by hand."
    )
    lines.append("")
    lines.append("---")
    lines.append(_FOOTER)
    return _render(lines)


def release_candidate_body(
    *,
    version: str,
    rc_number: int,
    slug: str,
    pr_number: int | None,
) -> str:
    lines = [f"## Release candidate {rc_number} for v{version}", ""]
    lines.append("This is a **pre-release** intended for testing only.")
    lines.append("")
    lines.append("### Changes")
    if pr_number is not None:
        lines.append(
            f"See the [release PR #{pr_number}]({pr_url(slug, pr_number)}) for the full changelog."
        )
    else:
        lines.append("No release PR is associated with this candidate.")
    lines.append("")
    lines.append("---")
    lines.append(_FOOTER)
    return _render(lines)
