"""What every workflow run is handed."""

from __future__ import annotations

from dataclasses import dataclass

from relkit.core.config import Config
from relkit.core.result import Err, Ok, Result
from relkit.git.working_copy import WorkingCopyProtocol
from relkit.github.hosting import HostingProtocol
from relkit.output.console import ConsoleProtocol
from relkit.release.errors import ReleaseError
from relkit.release.guard import Verdict
from relkit.release.model import WorkflowOutcome


@dataclass(frozen=True, slots=True)
class WorkflowContext:
    hosting: HostingProtocol
    config: Config
    console: ConsoleProtocol
    dry_run: bool = False
    # Only backport and forwardport touch a checkout.
    working_copy: WorkingCopyProtocol | None = None

    def require_working_copy(self) -> Result[WorkingCopyProtocol, ReleaseError]:
        if self.working_copy is None:
            return Err(
                ReleaseError(
                    kind="config",
                    message="this workflow needs a git checkout",
                    hint="run from a clone of the repository or pass --workdir",
                )
            )
        return Ok(self.working_copy)


def report_noop(ctx: WorkflowContext, verdict: Verdict) -> WorkflowOutcome:
    if verdict.decision == "branch_in_progress":
        ctx.console.warning(f"in progress elsewhere: {verdict.reason}")
    else:
        ctx.console.info(f"nothing to do: {verdict.reason}")
    if verdict.url:
        ctx.console.print(f"  {verdict.url}")
    return WorkflowOutcome(status="noop", summary=verdict.reason, url=verdict.url)


def report_dry_run(ctx: WorkflowContext, actions: list[str], *, url: str | None = None) -> WorkflowOutcome:
    for action in actions:
        ctx.console.intent(action)
    return WorkflowOutcome(
        status="dry_run",
        summary="dry run, no changes made",
        url=url,
        details=tuple(actions),
    )
