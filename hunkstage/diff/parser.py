"""Diff parser for hunkstage diff module.

Contains functions for parsing unified diff output:
- parse_file_diff: Parse the diff of a single file into a Diff
- parse_unified_diff: Parse multi-file git diff output into FileDiff blocks
- _parse_file_block: Parse a single file block from the diff
- _parse_hunks: Parse hunks from the hunk portion of a file diff
- _parse_hunk: Parse one hunk, driven by the counts in its header
- _mark_no_newline: Attach a no-newline marker to the preceding line
"""

import re
from dataclasses import replace
from typing import Optional

from hunkstage.diff.models import (
    Diff,
    DiffHunk,
    DiffLine,
    DiffLineType,
    FileDiff,
)


# Format: @@ -old_start[,old_len] +new_start[,new_len] @@ optional context
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")


class DiffParseError(ValueError):
    """Raised when diff text is not valid unified diff."""

    pass


def _split_lines(text: str) -> list[str]:
    """Split diff text into lines, dropping the empty tail after a final newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_file_diff(diff_text: str) -> Diff:
    """Parse the unified diff of exactly one file.

    Header lines (``diff --git``, ``index``, ``---``, ``+++``) are skipped.
    The first ``@@`` line gets absolute index 0.

    Args:
        diff_text: Raw diff text for one file

    Returns:
        Diff with absolute line addressing

    Raises:
        DiffParseError: If a hunk header or body line is malformed
    """
    lines = _split_lines(diff_text)
    for i, line in enumerate(lines):
        if line.startswith("@@"):
            return Diff(tuple(_parse_hunks(lines[i:])))
    return Diff(())


def parse_unified_diff(diff_output: str) -> tuple[list[FileDiff], list[str]]:
    """Parse unified diff output from 'git diff'.

    Args:
        diff_output: Raw output from git diff

    Returns:
        Tuple of (list of FileDiff objects, list of warning messages)
    """
    files: list[FileDiff] = []
    warnings: list[str] = []

    if not diff_output.strip():
        return files, warnings

    # Each file starts with 'diff --git a/... b/...'
    file_blocks = re.split(r"(?=^diff --git )", diff_output, flags=re.MULTILINE)

    for block in file_blocks:
        if not block.startswith("diff --git"):
            continue

        file_diff = _parse_file_block(_split_lines(block), warnings)
        if file_diff:
            files.append(file_diff)

    return files, warnings


def _parse_file_block(lines: list[str], warnings: list[str]) -> Optional[FileDiff]:
    """Parse a single file block from the diff.

    Args:
        lines: Lines of the file block
        warnings: List to append warnings to

    Returns:
        FileDiff object or None if the block header is invalid
    """
    match = re.match(r"diff --git a/(.*) b/(.*)", lines[0])
    if not match:
        return None

    old_path = match.group(1)
    file_path = match.group(2)
    is_renamed = old_path != file_path

    header_lines = []
    is_new_file = False
    is_deleted_file = False
    hunk_start_idx = None

    for i, line in enumerate(lines):
        if line.startswith("@@"):
            hunk_start_idx = i
            break
        header_lines.append(line)

        if "GIT binary patch" in line or line.startswith("Binary files"):
            warnings.append(f"Binary file skipped: {file_path}")
            return FileDiff(
                file_path=file_path,
                diff_header_lines=header_lines,
                is_binary=True,
                old_path=old_path if is_renamed else None,
            )

        if line.startswith("new file mode"):
            is_new_file = True
        elif line.startswith("deleted file mode"):
            is_deleted_file = True
        elif line.startswith("rename from "):
            is_renamed = True
            old_path = line[len("rename from "):]

    diff = Diff(tuple(_parse_hunks(lines[hunk_start_idx:]))) if hunk_start_idx is not None else Diff(())

    return FileDiff(
        file_path=file_path,
        diff_header_lines=header_lines,
        diff=diff,
        is_new_file=is_new_file,
        is_deleted_file=is_deleted_file,
        is_renamed=is_renamed,
        old_path=old_path if is_renamed else None,
    )


def _parse_hunks(lines: list[str]) -> list[DiffHunk]:
    """Parse hunks from the hunk portion of a file diff.

    Args:
        lines: Lines starting from first @@

    Returns:
        List of DiffHunk objects with contiguous absolute addressing
    """
    hunks: list[DiffHunk] = []
    position = 0
    unified_index = 0

    while position < len(lines):
        line = lines[position]
        if not line.startswith("@@"):
            # Blank lines between hunks come from the trailing newline of git output
            if line.strip():
                raise DiffParseError(f"Unexpected line outside of a hunk: {line!r}")
            position += 1
            continue

        hunk, position = _parse_hunk(lines, position, unified_index)
        hunks.append(hunk)
        unified_index = hunk.unified_diff_end

    return hunks


def _parse_hunk(lines: list[str], position: int, unified_index: int) -> tuple[DiffHunk, int]:
    """Parse the hunk whose header is at ``lines[position]``.

    Returns:
        Tuple of (DiffHunk, position of the first line after the hunk)
    """
    header = lines[position]
    match = _HUNK_HEADER_RE.match(header)
    if not match:
        raise DiffParseError(f"Malformed hunk header: {header!r}")

    old_start = int(match.group(1))
    old_count = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_count = int(match.group(4)) if match.group(4) is not None else 1
    trailer = match.group(5)

    body: list[DiffLine] = [DiffLine(text=header, type=DiffLineType.HUNK)]
    old_remaining = old_count
    new_remaining = new_count
    old_line = old_start
    new_line = new_start
    position += 1

    while old_remaining > 0 or new_remaining > 0:
        if position >= len(lines):
            raise DiffParseError(f"Hunk {header!r} ends before its declared line count")
        raw = lines[position]
        position += 1

        if raw.startswith("\\"):
            body[-1] = _mark_no_newline(body[-1], header)
            continue

        # Some tools strip the single space from empty context lines
        prefix = raw[:1] or " "
        text = raw[1:]

        if prefix == " " and old_remaining > 0 and new_remaining > 0:
            body.append(DiffLine(text, DiffLineType.CONTEXT, old_line, new_line))
            old_line += 1
            new_line += 1
            old_remaining -= 1
            new_remaining -= 1
        elif prefix == "-" and old_remaining > 0:
            body.append(DiffLine(text, DiffLineType.DELETE, old_line, None))
            old_line += 1
            old_remaining -= 1
        elif prefix == "+" and new_remaining > 0:
            body.append(DiffLine(text, DiffLineType.ADD, None, new_line))
            new_line += 1
            new_remaining -= 1
        else:
            raise DiffParseError(f"Unexpected line in hunk {header!r}: {raw!r}")

    # A missing newline on the last line is reported after the counted lines
    if position < len(lines) and lines[position].startswith("\\"):
        body[-1] = _mark_no_newline(body[-1], header)
        position += 1

    hunk = DiffHunk(
        old_start=old_start,
        old_count=old_count,
        new_start=new_start,
        new_count=new_count,
        header_trailer=trailer,
        lines=tuple(body),
        unified_diff_start=unified_index,
    )
    return hunk, position


def _mark_no_newline(line: DiffLine, header: str) -> DiffLine:
    """Flag the line preceding a '\\ No newline at end of file' marker."""
    if line.type == DiffLineType.HUNK:
        raise DiffParseError(f"Hunk {header!r} has a no-newline marker before any content line")
    return replace(line, no_trailing_newline=True)
