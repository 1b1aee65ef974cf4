"""Git working-copy operations.

Usage:
    from relkit.git import WorkingCopy

    wc = WorkingCopy(Path("."))
    wc.fetch("main")
"""

from relkit.git.working_copy import GitError, WorkingCopy, WorkingCopyProtocol

__all__ = [
    "GitError",
    "WorkingCopy",
    "WorkingCopyProtocol",
]
