from __future__ import annotations

import typer

from relkit import __version__
from relkit.cli.commands.release_cmd import (
    backport_cmd,
    create_rc,
    create_release_branch_cmd,
    forwardport_cmd,
    sync_release_branch_cmd,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command("create-rc")(create_rc)
app.command("create-release-branch")(create_release_branch_cmd)
app.command("backport")(backport_cmd)
app.command("forwardport")(forwardport_cmd)
app.command("sync-release-branch")(sync_release_branch_cmd)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Release-branch automation for GitHub repositories."""


def main() -> None:
    app()
