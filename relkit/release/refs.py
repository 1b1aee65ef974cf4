"""Ref resolution: branch, then tag, then raw commit.

A branch and a tag may share a name; the branch wins without warning.
"""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.github.hosting import HostingProtocol
from relkit.release.errors import ReleaseError


def resolve_ref(hosting: HostingProtocol, ref: str) -> Result[str, ReleaseError]:
    """Commit sha ``ref`` currently names."""
    branch = hosting.get_branch_sha(ref)
    if isinstance(branch, Err):
        return branch
    if branch.value is not None:
        return Ok(branch.value)

    tag = hosting.get_tag_commit_sha(ref)
    if isinstance(tag, Err):
        return tag
    if tag.value is not None:
        return Ok(tag.value)

    commit = hosting.get_commit(ref)
    if isinstance(commit, Err):
        return commit
    if commit.value is not None:
        return Ok(commit.value.sha)

    return Err(
        ReleaseError(
            kind="not_found",
            message=f"could not resolve ref: {ref}",
            hint=f"no branch, tag or commit named {ref} in {hosting.slug}",
        )
    )
