"""Working-copy steps shared by backport and forwardport."""

from __future__ import annotations

from collections.abc import Callable

from relkit.core.config import GitConfig
from relkit.core.result import Err, Ok, Result
from relkit.git.working_copy import GitError, WorkingCopyProtocol
from relkit.output.console import ConsoleProtocol, Style
from relkit.release.errors import ReleaseError


def git_failure(error: GitError) -> ReleaseError:
    if error.conflict:
        return ReleaseError(
            kind="conflict",
            message=f"git {error.command} hit a conflict; resolve manually",
            hint=error.message or None,
        )
    return ReleaseError(
        kind="git_failed",
        message=f"git {error.command} failed (exit {error.returncode})",
        hint=error.message or None,
    )


GitStep = tuple[str, Callable[[], Result[None, GitError]]]


def run_steps(steps: list[GitStep], console: ConsoleProtocol) -> Result[None, ReleaseError]:
    """Run ``steps`` in order, stopping at the first failure.

    Nothing is rolled back; the checkout stays as the failing step left it.
    """
    for label, step in steps:
        console.print(f"  {label}", Style.DIM)
        result = step()
        if isinstance(result, Err):
            return Err(git_failure(result.error))
    return Ok(None)


def prepare_branch(
    wc: WorkingCopyProtocol,
    *,
    identity: GitConfig,
    base_branch: str,
    new_branch: str,
) -> list[GitStep]:
    """Identity, fetch of ``base_branch`` and ``new_branch`` created from it."""
    return [
        ("git config user", lambda: wc.configure_user(identity.user_name, identity.user_email)),
        (f"git fetch {base_branch}", lambda: wc.fetch(base_branch)),
        (
            f"git checkout -b {new_branch}",
            lambda: wc.create_branch_from(new_branch, wc.remote_ref(base_branch)),
        ),
    ]
