from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relkit.core.config import (
    CONFIG_FILE_NAME,
    Config,
    RepoTarget,
    load_config,
    load_optional_config,
    resolve_repo_target,
)
from relkit.core.errors import ExitCode
from relkit.core.result import Err
from relkit.git.working_copy import WorkingCopy
from relkit.github.api import GhTransport, ensure_gh_available
from relkit.github.client import GitHubClient
from relkit.output.console import ConsoleProtocol, RichConsole
from relkit.release.context import WorkflowContext


@dataclass(frozen=True, slots=True)
class CLIContext:
    target: RepoTarget
    config: Config
    console: ConsoleProtocol
    workflow: WorkflowContext


def _fail(console: ConsoleProtocol, message: str) -> typer.Exit:
    console.error(message)
    return typer.Exit(code=int(ExitCode.FAILURE))


def build_context(
    *,
    owner: str | None,
    repo: str | None,
    workdir: Path | None,
    config_path: Path | None,
    dry_run: bool,
) -> CLIContext:
    """Resolve configuration, credentials and the hosting client.

    Everything here happens before the first network or git call.
    """
    console = RichConsole()
    root = (workdir or Path.cwd()).expanduser().resolve()

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_optional_config(root / CONFIG_FILE_NAME)
    if isinstance(config_result, Err):
        raise _fail(console, config_result.error.message)
    config = config_result.value

    target_result = resolve_repo_target(owner=owner, name=repo, env=os.environ)
    if isinstance(target_result, Err):
        raise _fail(console, target_result.error.message)
    target = target_result.value

    gh = ensure_gh_available()
    if isinstance(gh, Err):
        raise _fail(console, gh.error.pretty())

    hosting = GitHubClient(target, GhTransport(workdir=root, token=target.token))
    workflow = WorkflowContext(
        hosting=hosting,
        config=config,
        console=console,
        dry_run=dry_run,
        working_copy=WorkingCopy(root, remote=config.git.remote),
    )
    return CLIContext(target=target, config=config, console=console, workflow=workflow)
