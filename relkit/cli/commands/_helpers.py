"""Shared helpers for CLI commands."""

from __future__ import annotations

import typer

from relkit.core.errors import ExitCode
from relkit.core.result import Err, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.release.errors import ReleaseError
from relkit.release.model import WorkflowOutcome


def finish(result: Result[WorkflowOutcome, ReleaseError], console: ConsoleProtocol) -> None:
    """Report a workflow result; exit non-zero on failure.

    No-ops and dry runs are successes.
    """
    if isinstance(result, Err):
        error = result.error
        console.error(f"[{error.kind}] {error.message}")
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(ExitCode.FAILURE))

    outcome = result.value
    if outcome.status == "dry_run":
        console.print("dry run: no changes made", Style.DIM)
