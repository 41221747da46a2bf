"""CLI command for listing the selectable lines of a file's diff."""

from pathlib import Path
from typing import Optional

import typer

from hunkstage.diff import DiffParseError
from hunkstage.git import GitError
from hunkstage.cli.utils import load_file


def show_command(
    path: Path = typer.Argument(..., help="Modified file to inspect"),
    context_lines: Optional[int] = typer.Option(
        None,
        "--context",
        "-U",
        min=0,
        help="Context lines around each change (default from config)",
    ),
) -> None:
    """Show unstaged hunks with the line indices used by --lines."""
    try:
        loaded = load_file(path, context_lines)
    except (GitError, DiffParseError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    diff = loaded.diff
    typer.echo(f"{loaded.path} ({loaded.status.value}): {len(diff.hunks)} hunk(s)")

    for hunk_number, hunk in enumerate(diff.hunks):
        typer.echo()
        typer.echo(f"Hunk {hunk_number}  {hunk.lines[0].text}")
        for offset, line in enumerate(hunk.lines[1:], start=1):
            label = str(hunk.unified_diff_start + offset) if line.is_change else ""
            typer.echo(f"{label:>6}  {line.render()}")
