"""Working-copy git operations.

Backports and forwardports need a real checkout: cherry-pick and the
"ours"-strategy merge have no hosting-API equivalent. Each method is one
synchronous ``git`` invocation in the checkout; a non-zero exit is returned
as ``GitError`` and nothing is retried or rolled back. After a failed
cherry-pick the checkout is left mid-operation so the CI log and a human
can inspect it.

Usage:
    wc = WorkingCopy(Path("."), remote="origin")
    wc.fetch("release/v1.15")
    wc.create_branch_from("backport/pr-42-to-v1.15", wc.remote_ref("release/v1.15"))
    match wc.cherry_pick(sha):
        case Err(e) if e.conflict:
            print("resolve manually")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

__all__ = [
    "GitError",
    "WorkingCopy",
    "WorkingCopyProtocol",
]

_CONFLICT_MARKERS = ("CONFLICT", "could not apply", "after resolving the conflicts")


@dataclass(frozen=True, slots=True)
class GitError:
    """A git command failed.

    Attributes:
        command: Short form of the git command that failed.
        message: git's own diagnostic output.
        returncode: Process exit status.
        conflict: True when the failure is an unresolved merge conflict.
    """

    command: str
    message: str
    returncode: int = 1
    conflict: bool = False


class WorkingCopyProtocol(Protocol):
    """The git operations release workflows need from a checkout."""

    def remote_ref(self, branch: str) -> str: ...

    def configure_user(self, name: str, email: str) -> Result[None, GitError]: ...

    def fetch(self, branch: str) -> Result[None, GitError]: ...

    def checkout(self, ref: str) -> Result[None, GitError]: ...

    def create_branch_from(self, branch: str, base: str) -> Result[None, GitError]: ...

    def cherry_pick(self, sha: str) -> Result[None, GitError]: ...

    def merge_ours(self, source: str, message: str) -> Result[None, GitError]: ...

    def push(self, branch: str) -> Result[None, GitError]: ...


def _looks_like_conflict(error: ProcessError) -> bool:
    text = f"{error.stdout}\n{error.stderr}"
    return any(marker in text for marker in _CONFLICT_MARKERS)


class WorkingCopy:
    """A local clone of the hosted repository.

    Attributes:
        path: Checkout root.
        remote: Name of the remote that mirrors the hosted repository.
    """

    def __init__(self, path: Path, *, remote: str = "origin") -> None:
        self.path = path
        self.remote = remote

    def remote_ref(self, branch: str) -> str:
        return f"{self.remote}/{branch}"

    def configure_user(self, name: str, email: str) -> Result[None, GitError]:
        for key, value in (("user.name", name), ("user.email", email)):
            result = self._step(["config", key, value], command=f"config {key}")
            if isinstance(result, Err):
                return result
        return Ok(None)

    def fetch(self, branch: str) -> Result[None, GitError]:
        return self._step(["fetch", self.remote, branch], command=f"fetch {branch}")

    def checkout(self, ref: str) -> Result[None, GitError]:
        return self._step(["checkout", ref], command=f"checkout {ref}")

    def create_branch_from(self, branch: str, base: str) -> Result[None, GitError]:
        return self._step(["checkout", "-b", branch, base], command=f"checkout -b {branch}")

    def cherry_pick(self, sha: str) -> Result[None, GitError]:
        return self._step(["cherry-pick", sha], command=f"cherry-pick {sha}")

    def merge_ours(self, source: str, message: str) -> Result[None, GitError]:
        """Record ``source`` as merged while keeping the current tree."""
        return self._step(
            ["merge", "--no-ff", "-s", "ours", "-m", message, source],
            command=f"merge -s ours {source}",
        )

    def push(self, branch: str) -> Result[None, GitError]:
        return self._step(["push", self.remote, branch], command=f"push {branch}")

    def _step(self, args: list[str], *, command: str) -> Result[None, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            e = result.error
            return Err(
                GitError(
                    command=command,
                    message=e.detail,
                    returncode=e.returncode,
                    conflict=_looks_like_conflict(e),
                )
            )
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path)
