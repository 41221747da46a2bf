"""Patch formatter for hunkstage staging module.

Contains:
- create_patches_for_modified_file: Build one optional patch per hunk
- format_hunk_patch: Build the patch for a single hunk
- validate_selection: Check that a selection fits the diff it targets
- combine_patches: Join per-hunk patches into one patch text
"""

import logging
from typing import Optional, Sequence

from hunkstage.diff.models import (
    LINE_PREFIXES,
    NO_NEWLINE_MARKER,
    Diff,
    DiffHunk,
    DiffLineType,
    format_hunk_header,
)
from hunkstage.staging.exceptions import OutOfRangeSelectionError, UnsupportedChangeKindError
from hunkstage.staging.models import DiffSelection, FileStatus, WorkingDirectoryFileChange

logger = logging.getLogger(__name__)


def _file_header(path: str) -> str:
    return f"--- a/{path}\n+++ b/{path}\n"


def validate_selection(selection: DiffSelection, diff: Diff) -> None:
    """Check that every index keyed by the selection exists in the diff.

    Args:
        selection: The user's line selection
        diff: The diff the selection was built against

    Raises:
        OutOfRangeSelectionError: If a keyed index is not part of the diff
    """
    for index in selection.selected_lines:
        if not diff.contains_index(index):
            raise OutOfRangeSelectionError(index, diff.first_index, diff.line_count)


def format_hunk_patch(path: str, hunk: DiffHunk, selection: DiffSelection) -> Optional[str]:
    """Build a standalone patch containing only the selected lines of a hunk.

    Unselected additions are dropped. Unselected deletions become context so
    the line stays in the staged file. Start positions and the header trailer
    are kept from the original hunk; only the counts are recomputed.

    Args:
        path: File path used in the ---/+++ header lines
        hunk: The hunk to filter
        selection: The user's line selection

    Returns:
        Patch text, or None if nothing in the hunk is selected
    """
    body: list[str] = []
    old_count = 0
    new_count = 0
    has_changes = False

    # Offset of the last addition that will be emitted, if any
    last_addition = max(
        (
            offset
            for offset, line in enumerate(hunk.lines)
            if line.type == DiffLineType.ADD
            and selection.is_selected(hunk.unified_diff_start + offset)
        ),
        default=-1,
    )

    for offset, line in enumerate(hunk.lines):
        # The @@ marker is replaced by the recomputed header below
        if line.type == DiffLineType.HUNK:
            continue

        line_type = line.type
        if line.is_change:
            if selection.is_selected(hunk.unified_diff_start + offset):
                has_changes = True
            elif line_type == DiffLineType.ADD:
                continue
            elif line.no_trailing_newline and offset < last_addition:
                # The old last line gains a newline so later additions can follow it
                body.append(f"-{line.text}\n{NO_NEWLINE_MARKER}\n+{line.text}\n")
                old_count += 1
                new_count += 1
                continue
            else:
                line_type = DiffLineType.CONTEXT

        if line_type != DiffLineType.ADD:
            old_count += 1
        if line_type != DiffLineType.DELETE:
            new_count += 1

        body.append(f"{LINE_PREFIXES[line_type]}{line.text}\n")
        if line.no_trailing_newline:
            body.append(f"{NO_NEWLINE_MARKER}\n")

    if not has_changes:
        return None

    header = format_hunk_header(
        hunk.old_start, old_count, hunk.new_start, new_count, hunk.header_trailer
    )
    return f"{_file_header(path)}{header}\n{''.join(body)}"


def create_patches_for_modified_file(
    file_change: WorkingDirectoryFileChange, diff: Diff
) -> list[Optional[str]]:
    """Build one patch per hunk from the selected lines of a modified file.

    Each patch can be applied on its own. ``result[i]`` belongs to
    ``diff.hunks[i]`` and is None when that hunk has no selected change.

    Args:
        file_change: The modified file and its selection
        diff: The file's diff, as the selection was built against

    Returns:
        List of optional patch texts, one slot per hunk

    Raises:
        UnsupportedChangeKindError: If the file is not an in-place modification
        OutOfRangeSelectionError: If the selection references a missing line
    """
    if file_change.status != FileStatus.MODIFIED:
        raise UnsupportedChangeKindError(file_change.path, file_change.status)

    validate_selection(file_change.selection, diff)

    patches = [
        format_hunk_patch(file_change.path, hunk, file_change.selection)
        for hunk in diff.hunks
    ]
    logger.debug(
        "Built %d patch(es) from %d hunk(s) for %s",
        sum(1 for patch in patches if patch is not None),
        len(patches),
        file_change.path,
    )
    return patches


def combine_patches(path: str, patches: Sequence[Optional[str]]) -> Optional[str]:
    """Join per-hunk patches for one file under a single file header.

    Args:
        path: File path used in the ---/+++ header lines
        patches: Output of create_patches_for_modified_file

    Returns:
        Combined patch text, or None if every slot is empty
    """
    file_header = _file_header(path)
    hunks = [patch[len(file_header):] for patch in patches if patch is not None]
    if not hunks:
        return None
    return file_header + "".join(hunks)
