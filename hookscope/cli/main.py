"""Top-level callback for the hookscope CLI."""

import logging

import typer

from hookscope import __version__


def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log git commands as they run",
    ),
) -> None:
    """Inspect repository state and tool output the way git hooks see it."""
    if version:
        typer.echo(f"hookscope {__version__}")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
