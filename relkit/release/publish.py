"""Publishing: pull requests and draft releases."""

from __future__ import annotations

from relkit.core.result import Result
from relkit.github.hosting import HostingProtocol
from relkit.release.errors import ReleaseError
from relkit.release.model import PullRequest, Release


def publish_pr(
    hosting: HostingProtocol,
    *,
    branch: str,
    base: str,
    title: str,
    body: str,
) -> Result[PullRequest, ReleaseError]:
    return hosting.create_pr(head=branch, base=base, title=title, body=body)


def publish_release(
    hosting: HostingProtocol,
    *,
    tag: str,
    body: str,
    draft: bool = True,
    prerelease: bool = True,
) -> Result[Release, ReleaseError]:
    """Release named after its tag; draft pre-release unless told otherwise."""
    return hosting.create_release(
        tag=tag,
        name=tag,
        body=body,
        draft=draft,
        prerelease=prerelease,
    )
