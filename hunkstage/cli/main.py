"""Root callback for the hunkstage CLI."""

from typing import Optional

import typer

from hunkstage import __version__
from hunkstage.cli.utils import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hunkstage {__version__}")
        raise typer.Exit()


def main_command(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Log git commands and patch details to stderr",
    ),
) -> None:
    """Stage individual lines of modified files."""
    configure_logging(debug)
