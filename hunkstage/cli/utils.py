"""Shared utility functions for CLI commands."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from hunkstage.diff import Diff, DiffParseError, parse_unified_diff
from hunkstage.git import GitError, get_file_diff, get_file_status, get_repo_root
from hunkstage.staging import DiffSelection, DiffSelectionType, FileStatus
from hunkstage.user_config import load_config


logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^(\d+)(?:-(\d+))?$")


class SelectionSpecError(ValueError):
    """Raised when a --lines/--hunks/--selection-file value is invalid."""

    pass


@dataclass
class LoadedFile:
    """A file's diff as loaded from the repository for one CLI invocation."""

    repo_root: Path
    path: str  # Relative to repo_root, POSIX separators
    status: FileStatus
    diff: Diff
    config: dict


def configure_logging(debug: bool) -> None:
    """Send hunkstage log records to stderr at DEBUG or WARNING level."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_index_spec(spec: str) -> list[int]:
    """Parse a comma separated list of indices and inclusive ranges.

    Args:
        spec: Text such as "3,5-7".

    Returns:
        Sorted unique indices, e.g. [3, 5, 6, 7].

    Raises:
        SelectionSpecError: If an item is not a number or a valid range.
    """
    indices: set[int] = set()
    for item in spec.split(","):
        item = item.strip()
        if not item:
            continue
        match = _RANGE_RE.match(item)
        if not match:
            raise SelectionSpecError(f"Invalid index or range: {item!r}")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start
        if end < start:
            raise SelectionSpecError(f"Range end is before its start: {item!r}")
        indices.update(range(start, end + 1))
    if not indices:
        raise SelectionSpecError(f"No indices in {spec!r}")
    return sorted(indices)


def build_selection(
    diff: Diff,
    lines: Optional[str] = None,
    hunks: Optional[str] = None,
    select_all: bool = False,
    selection_file: Optional[Path] = None,
) -> Optional[DiffSelection]:
    """Build a DiffSelection from command line options.

    --all wins over the other options; --selection-file replaces --lines and
    --hunks. --lines and --hunks combine.

    Args:
        diff: The diff the selection refers to.
        lines: Absolute line index spec.
        hunks: Hunk number spec (0-based, as printed by 'show').
        select_all: Select every change.
        selection_file: JSON file holding a serialized DiffSelection.

    Returns:
        The selection, or None if no option was given.

    Raises:
        SelectionSpecError: If an option value is invalid.
    """
    if select_all:
        return DiffSelection(selection_type=DiffSelectionType.ALL)

    if selection_file is not None:
        try:
            return DiffSelection.model_validate_json(selection_file.read_text())
        except OSError as e:
            raise SelectionSpecError(f"Cannot read selection file {selection_file}: {e}")
        except ValidationError as e:
            raise SelectionSpecError(f"Invalid selection file {selection_file}:\n{e}")

    if lines is None and hunks is None:
        return None

    chosen: set[int] = set()
    if lines is not None:
        chosen.update(parse_index_spec(lines))
    if hunks is not None:
        for hunk_index in parse_index_spec(hunks):
            if hunk_index >= len(diff.hunks):
                raise SelectionSpecError(
                    f"Hunk {hunk_index} does not exist (file has {len(diff.hunks)} hunk(s))"
                )
            chosen.update(diff.hunk_line_indices(hunk_index))

    # Out-of-range indices stay in the map so the formatter rejects them
    selected_lines = {index: False for index in diff.selectable_indices()}
    selected_lines.update({index: True for index in chosen})
    return DiffSelection(selection_type=DiffSelectionType.PARTIAL, selected_lines=selected_lines)


def resolve_repo_path(repo_root: Path, path: Path) -> str:
    """Convert a user-supplied path into a repository-relative POSIX path.

    Raises:
        GitError: If the path is outside the repository.
    """
    try:
        return path.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        raise GitError(f"{path} is outside the repository at {repo_root}")


def load_file(path: Path, context_lines: Optional[int] = None) -> LoadedFile:
    """Locate the repository, read its config, and parse the file's diff.

    Raises:
        GitError: If git fails or the file has no unstaged changes.
        DiffParseError: If git's output cannot be parsed or is a binary diff.
    """
    repo_root = get_repo_root()
    config = load_config(repo_root)
    rel_path = resolve_repo_path(repo_root, path)
    if context_lines is None:
        context_lines = config["context_lines"]

    status = get_file_status(rel_path, repo_root=repo_root)
    diff_text = get_file_diff(rel_path, context_lines=context_lines, repo_root=repo_root)

    files, warnings = parse_unified_diff(diff_text)
    for warning in warnings:
        logger.warning(warning)
    if not files:
        raise DiffParseError(f"No file diff found in git output for {rel_path}")

    file_diff = files[0]
    if file_diff.is_binary:
        raise DiffParseError(f"{rel_path} is a binary file and has no lines to stage")
    # The diff header is authoritative when status and diff disagree
    if file_diff.is_new_file:
        status = FileStatus.NEW
    elif file_diff.is_deleted_file:
        status = FileStatus.DELETED

    return LoadedFile(
        repo_root=repo_root,
        path=rel_path,
        status=status,
        diff=file_diff.diff,
        config=config,
    )


def colorize_diff(text: str) -> str:
    """Add ANSI color codes to diff lines like git diff.

    - Red for removed lines (-)
    - Green for added lines (+)
    - Cyan for hunk headers (@@)
    - Bold for file header lines

    Args:
        text: Raw diff text.

    Returns:
        Colorized diff text with ANSI escape codes.
    """
    red = "\033[31m"
    green = "\033[32m"
    cyan = "\033[36m"
    bold = "\033[1m"
    reset = "\033[0m"

    colorized = []
    for line in text.split("\n"):
        if line.startswith("@@"):
            colorized.append(f"{cyan}{line}{reset}")
        elif line.startswith("---") or line.startswith("+++"):
            colorized.append(f"{bold}{line}{reset}")
        elif line.startswith("-"):
            colorized.append(f"{red}{line}{reset}")
        elif line.startswith("+"):
            colorized.append(f"{green}{line}{reset}")
        else:
            colorized.append(line)
    return "\n".join(colorized)
