"""Top-level callback for the git-stitch CLI."""

import typer

from gitstitch import __version__


def main_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
    ),
) -> None:
    """Stitch independent repositories into one tree and rip them apart again."""
    if version:
        typer.echo(f"git-stitch version {__version__}")
        raise typer.Exit(0)

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    typer.echo(ctx.get_help())
    raise typer.Exit(1)
