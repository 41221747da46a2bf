"""CLI entry point for hunkstage.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from hunkstage.cli.config import config_app
from hunkstage.cli.main import main_command
from hunkstage.cli.show import show_command
from hunkstage.cli.stage import patch_command, stage_command

# Main application
app = typer.Typer(
    name="hunkstage",
    help="hunkstage: stage individual lines of modified files",
    add_completion=False,
    no_args_is_help=True,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("show")(show_command)
app.command("patch")(patch_command)
app.command("stage")(stage_command)

# Root callback handles --version and --debug
app.callback()(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
    "show_command",
    "patch_command",
    "stage_command",
]
