"""Process exit codes.

relkit runs unattended in CI, where the only distinction that matters is
"finished (including no-op)" versus "failed". Failure kinds are reported in
the error message, not in the exit status.
"""

from enum import IntEnum

__all__ = ["ExitCode"]


class ExitCode(IntEnum):
    """Exit codes for relkit commands."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ExitCode.OK
