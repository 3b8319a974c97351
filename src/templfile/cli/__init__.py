"""
templfile CLI.

Commands:

- parse: Parse one file and print its document tree
- check: Parse a set of files and report failures
"""

from __future__ import annotations

import logging
import platform

import typer

from templfile import __version__
from templfile.cli.commands import check_command, parse_command


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"templfile version {__version__}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="templfile – parser for templ files",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """templfile CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


app.command(name="parse")(parse_command)
app.command(name="check")(check_command)


def main() -> None:
    app()


__all__ = ["app", "main", "version_callback"]
