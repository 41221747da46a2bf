"""Unified diff model and parser for hunkstage.

This package provides:
- models: Diff, DiffHunk, DiffLine, DiffLineType, FileDiff, DiffModelError
- parser: parse_file_diff, parse_unified_diff, DiffParseError
"""

# Models
from hunkstage.diff.models import (
    LINE_PREFIXES,
    NO_NEWLINE_MARKER,
    Diff,
    DiffHunk,
    DiffLine,
    DiffLineType,
    DiffModelError,
    FileDiff,
    format_hunk_header,
)

# Parser
from hunkstage.diff.parser import (
    DiffParseError,
    parse_file_diff,
    parse_unified_diff,
)


__all__ = [
    # Models
    "LINE_PREFIXES",
    "NO_NEWLINE_MARKER",
    "Diff",
    "DiffHunk",
    "DiffLine",
    "DiffLineType",
    "DiffModelError",
    "FileDiff",
    "format_hunk_header",
    # Parser
    "DiffParseError",
    "parse_file_diff",
    "parse_unified_diff",
]
