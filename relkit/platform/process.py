"""External command execution with Result-based error handling.

Every ``git`` and ``gh`` invocation in relkit goes through ``run``. Commands
are synchronous and blocking. Nothing is retried and nothing times out.

Usage:
    result = run(["git", "rev-parse", "HEAD"], cwd=Path("."))
    match result:
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"failed: {error.stderr}")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result

__all__ = ["ProcessError", "merged_env", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command exited non-zero or could not be started.

    Attributes:
        command: The command that was executed.
        returncode: Exit status, or -1 if the process never ran.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def detail(self) -> str:
        """Best available diagnostic text."""
        return self.stderr.strip() or self.stdout.strip() or str(self)


def merged_env(extra: Mapping[str, str]) -> dict[str, str]:
    """Current environment overlaid with ``extra``."""
    env = dict(os.environ)
    env.update(extra)
    return env


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        env: Full environment (inherits the current one if None).

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)
