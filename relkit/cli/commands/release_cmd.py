from __future__ import annotations

from pathlib import Path

import typer

from relkit.cli.commands._helpers import finish
from relkit.cli.context import build_context
from relkit.core.errors import ExitCode
from relkit.core.result import Err
from relkit.release.engine import run_intent
from relkit.release.model import (
    Backport,
    CreateReleaseBranch,
    CreateReleaseCandidate,
    Forwardport,
    SyncReleaseBranchToMain,
)
from relkit.release.version import parse_backport_label


def create_rc(
    pr: int | None = typer.Option(None, "--pr", help="Release-please PR number"),
    version: str | None = typer.Option(None, "--version", help="Explicit version (X.Y.Z)"),
    ref: str | None = typer.Option(None, "--ref", help="Ref to tag with --version"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repo: str | None = typer.Option(None, "--repo", help="Repository name"),
    workdir: Path | None = typer.Option(None, "--workdir", help="Repository checkout"),
    config: Path | None = typer.Option(None, "--config", help="Path to .relkit.toml"),
) -> None:
    """Tag the next release candidate and draft its pre-release."""
    ctx = build_context(owner=owner, repo=repo, workdir=workdir, config_path=config, dry_run=dry_run)
    if ref is not None and version is None:
        ctx.console.error("--ref requires --version")
        raise typer.Exit(code=int(ExitCode.FAILURE))
    intent = CreateReleaseCandidate(version=version, ref=ref, pr_number=pr)
    finish(run_intent(ctx.workflow, intent), ctx.console)


def create_release_branch_cmd(
    source: str | None = typer.Option(None, "--source", help="Ref to branch from (default: trunk)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repo: str | None = typer.Option(None, "--repo", help="Repository name"),
    workdir: Path | None = typer.Option(None, "--workdir", help="Repository checkout"),
    config: Path | None = typer.Option(None, "--config", help="Path to .relkit.toml"),
) -> None:
    """Create release/vX.Y for the next minor version."""
    ctx = build_context(owner=owner, repo=repo, workdir=workdir, config_path=config, dry_run=dry_run)
    finish(run_intent(ctx.workflow, CreateReleaseBranch(source_ref=source)), ctx.console)


def backport_cmd(
    pr: int = typer.Option(..., "--pr", help="Merged trunk PR number"),
    label: str = typer.Option(..., "--label", help="backport/vX.Y"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repo: str | None = typer.Option(None, "--repo", help="Repository name"),
    workdir: Path | None = typer.Option(None, "--workdir", help="Repository checkout"),
    config: Path | None = typer.Option(None, "--config", help="Path to .relkit.toml"),
) -> None:
    """Cherry-pick a merged PR onto a release branch."""
    ctx = build_context(owner=owner, repo=repo, workdir=workdir, config_path=config, dry_run=dry_run)
    target = parse_backport_label(label)
    if isinstance(target, Err):
        finish(target, ctx.console)
        return
    finish(run_intent(ctx.workflow, Backport(pr_number=pr, target_version=target.value)), ctx.console)


def forwardport_cmd(
    pr: int = typer.Option(..., "--pr", help="Merged release-please PR number"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repo: str | None = typer.Option(None, "--repo", help="Repository name"),
    workdir: Path | None = typer.Option(None, "--workdir", help="Repository checkout"),
    config: Path | None = typer.Option(None, "--config", help="Path to .relkit.toml"),
) -> None:
    """Bring a merged release PR from its release branch into trunk."""
    ctx = build_context(owner=owner, repo=repo, workdir=workdir, config_path=config, dry_run=dry_run)
    finish(run_intent(ctx.workflow, Forwardport(pr_number=pr)), ctx.console)


def sync_release_branch_cmd(
    tag: str = typer.Option(..., "--tag", help="Release tag (vX.Y.Z)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repo: str | None = typer.Option(None, "--repo", help="Repository name"),
    workdir: Path | None = typer.Option(None, "--workdir", help="Repository checkout"),
    config: Path | None = typer.Option(None, "--config", help="Path to .relkit.toml"),
) -> None:
    """Open (or refresh) a PR carrying release/vX.Y content into trunk."""
    ctx = build_context(owner=owner, repo=repo, workdir=workdir, config_path=config, dry_run=dry_run)
    finish(run_intent(ctx.workflow, SyncReleaseBranchToMain(tag=tag)), ctx.console)
