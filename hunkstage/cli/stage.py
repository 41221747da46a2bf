"""CLI commands for building and applying partial patches."""

from pathlib import Path
from typing import Optional

import typer

from hunkstage.diff import DiffParseError
from hunkstage.git import GitError, apply_patch_to_index
from hunkstage.staging import (
    PatchFormatError,
    WorkingDirectoryFileChange,
    combine_patches,
    create_patches_for_modified_file,
)
from hunkstage.cli.utils import (
    LoadedFile,
    SelectionSpecError,
    build_selection,
    colorize_diff,
    load_file,
)


def _build_patches(
    path: Path,
    lines: Optional[str],
    hunks: Optional[str],
    select_all: bool,
    selection_file: Optional[Path],
) -> tuple[LoadedFile, list[Optional[str]]]:
    """Load the file's diff and format the patches for the requested selection."""
    loaded = load_file(path)
    selection = build_selection(
        loaded.diff,
        lines=lines,
        hunks=hunks,
        select_all=select_all,
        selection_file=selection_file,
    )
    if selection is None:
        raise SelectionSpecError("Nothing selected. Use --lines, --hunks, --all or --selection-file.")

    file_change = WorkingDirectoryFileChange(
        path=loaded.path, status=loaded.status, selection=selection
    )
    return loaded, create_patches_for_modified_file(file_change, loaded.diff)


def patch_command(
    path: Path = typer.Argument(..., help="Modified file to build patches for"),
    lines: Optional[str] = typer.Option(
        None,
        "--lines",
        "-l",
        help="Line indices to include, as printed by 'show' (e.g. 5,7-9)",
    ),
    hunks: Optional[str] = typer.Option(
        None,
        "--hunks",
        help="Hunk numbers to include in full (e.g. 0,2)",
    ),
    select_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Include every change",
    ),
    selection_file: Optional[Path] = typer.Option(
        None,
        "--selection-file",
        help="Load the selection from a JSON file",
    ),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--no-color",
        help="Colorize output (default from config)",
    ),
) -> None:
    """Print one patch per hunk for the selected lines, without staging."""
    try:
        loaded, patches = _build_patches(path, lines, hunks, select_all, selection_file)
    except (GitError, DiffParseError, PatchFormatError, SelectionSpecError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    use_color = loaded.config.get("color", True) if color is None else color

    for hunk_index, patch in enumerate(patches):
        if patch is None:
            typer.echo(f"Hunk {hunk_index}: nothing selected", err=True)
            continue
        typer.echo(colorize_diff(patch) if use_color else patch, nl=False)


def stage_command(
    path: Path = typer.Argument(..., help="Modified file to stage lines from"),
    lines: Optional[str] = typer.Option(
        None,
        "--lines",
        "-l",
        help="Line indices to stage, as printed by 'show' (e.g. 5,7-9)",
    ),
    hunks: Optional[str] = typer.Option(
        None,
        "--hunks",
        help="Hunk numbers to stage in full (e.g. 0,2)",
    ),
    select_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Stage every change",
    ),
    selection_file: Optional[Path] = typer.Option(
        None,
        "--selection-file",
        help="Load the selection from a JSON file",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be staged without changing the index",
    ),
) -> None:
    """Stage only the selected lines of a modified file."""
    try:
        loaded, patches = _build_patches(path, lines, hunks, select_all, selection_file)

        pending = sum(1 for patch in patches if patch is not None)
        combined = combine_patches(loaded.path, patches)
        if combined is None:
            typer.echo(f"Nothing to stage in {loaded.path}")
            return

        if dry_run:
            typer.echo(f"Would stage {pending} of {len(patches)} hunk(s) in {loaded.path}")
            return

        # One git apply call, so a rejected hunk leaves the index untouched
        apply_patch_to_index(
            combined,
            repo_root=loaded.repo_root,
            check_first=loaded.config.get("check_before_apply", True),
        )
        typer.echo(f"Staged {pending} of {len(patches)} hunk(s) in {loaded.path}")

    except (GitError, DiffParseError, PatchFormatError, SelectionSpecError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
