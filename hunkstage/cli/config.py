"""CLI commands for repository configuration management."""

import typer

from hunkstage.git import GitError, get_repo_root
from hunkstage.user_config import (
    DEFAULT_CONFIG,
    ConfigError,
    load_config,
    set_config_value,
)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage hunkstage settings in .hunkstage/config.yaml",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the repository configuration."""
    try:
        repo_root = get_repo_root()
        config = load_config(repo_root)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Configuration in .hunkstage/config.yaml:")
    typer.echo()
    for key in DEFAULT_CONFIG:
        typer.echo(f"  {key}: {config.get(key)}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(DEFAULT_CONFIG)})"),
    value: str = typer.Argument(..., help="New value (e.g. 5, true, false)"),
) -> None:
    """Change a setting in .hunkstage/config.yaml."""
    try:
        repo_root = get_repo_root()
        saved = set_config_value(repo_root, key, value)
        typer.echo(f"Set {key} = {saved}")
    except (GitError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
