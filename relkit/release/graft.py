"""Object-level writes through the hosting API.

Neither operation is idempotent on its own; callers consult
``relkit.release.guard`` first.
"""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.github.hosting import HostingProtocol
from relkit.release.errors import ReleaseError
from relkit.release.version import rc_tag_name


def tag_message(tag: str) -> str:
    return f"Release candidate {tag}"


def tag_commit(
    hosting: HostingProtocol,
    *,
    version: str,
    rc_number: int,
    commit_sha: str,
) -> Result[str, ReleaseError]:
    """Create annotated tag ``v<version>-rc.<n>`` on ``commit_sha``.

    The tag object is written first, then ``refs/tags/<tag>`` pointing at it.
    Returns the tag name.
    """
    tag = rc_tag_name(version, rc_number)
    obj = hosting.create_tag_object(tag=tag, message=tag_message(tag), commit_sha=commit_sha)
    if isinstance(obj, Err):
        return obj

    ref = hosting.create_ref(f"refs/tags/{tag}", obj.value)
    if isinstance(ref, Err):
        return ref
    return Ok(tag)


def squash_graft(
    hosting: HostingProtocol,
    *,
    source_sha: str,
    dest_sha: str,
    message: str,
) -> Result[str, ReleaseError]:
    """New commit carrying ``source_sha``'s tree with ``dest_sha`` as sole parent.

    The result's content equals the source exactly; source history is not
    linked, so the commit reads as one squashed change on top of dest.
    """
    source = hosting.get_commit(source_sha)
    if isinstance(source, Err):
        return source
    if source.value is None or not source.value.tree_sha:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"source commit not found: {source_sha}",
                hint=hosting.slug,
            )
        )

    return hosting.create_commit(
        message=message,
        tree_sha=source.value.tree_sha,
        parents=[dest_sha],
    )
