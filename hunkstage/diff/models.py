"""Data models for hunkstage diff module.

Contains:
- DiffLineType: Kind of a single line in a hunk
- DiffLine: One line of hunk content
- DiffHunk: One contiguous change region of a file diff
- Diff: All hunks of a single file, with absolute line addressing
- FileDiff: A parsed file block from multi-file git output
- DiffModelError: Raised when hunks violate the addressing invariants
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DiffModelError(ValueError):
    """Raised when a diff is structurally inconsistent."""

    pass


class DiffLineType(Enum):
    """Kind of a line inside a hunk."""

    CONTEXT = "context"
    HUNK = "hunk"
    ADD = "add"
    DELETE = "delete"


# One-character prefix used for each line kind in unified diff text
LINE_PREFIXES = {
    DiffLineType.CONTEXT: " ",
    DiffLineType.ADD: "+",
    DiffLineType.DELETE: "-",
}

NO_NEWLINE_MARKER = "\\ No newline at end of file"


@dataclass(frozen=True)
class DiffLine:
    """One line of hunk content.

    ``text`` never includes the +/-/space prefix or a trailing newline.
    """

    text: str
    type: DiffLineType
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None
    no_trailing_newline: bool = False

    @property
    def is_change(self) -> bool:
        """Whether this line can be selected (an addition or deletion)."""
        return self.type in (DiffLineType.ADD, DiffLineType.DELETE)

    def render(self) -> str:
        """Render the line as it appears in unified diff text."""
        if self.type == DiffLineType.HUNK:
            return self.text
        return f"{LINE_PREFIXES[self.type]}{self.text}"


@dataclass(frozen=True)
class DiffHunk:
    """A contiguous change region.

    ``lines[0]`` is the ``@@`` marker line; the rest is the hunk body.
    ``unified_diff_start`` is the absolute index of the marker line within
    the whole diff's flattened line stream.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header_trailer: str
    lines: tuple[DiffLine, ...]
    unified_diff_start: int

    @property
    def unified_diff_end(self) -> int:
        """Absolute index one past this hunk's last line."""
        return self.unified_diff_start + len(self.lines)

    def absolute_index(self, line_index: int) -> int:
        """Convert an index into ``lines`` to an absolute diff index."""
        if not 0 <= line_index < len(self.lines):
            raise IndexError(f"Line {line_index} is outside hunk of {len(self.lines)} lines")
        return self.unified_diff_start + line_index

    def changed_line_indices(self) -> list[int]:
        """Absolute indices of every added or deleted line in this hunk."""
        return [
            self.unified_diff_start + i
            for i, line in enumerate(self.lines)
            if line.is_change
        ]

    def header(self) -> str:
        """The hunk's ``@@`` header as found in the source diff."""
        return format_hunk_header(
            self.old_start, self.old_count, self.new_start, self.new_count, self.header_trailer
        )

    def _validate(self) -> None:
        if not self.lines or self.lines[0].type != DiffLineType.HUNK:
            raise DiffModelError(
                f"Hunk at {self.unified_diff_start} must start with its @@ marker line"
            )
        old_count = 0
        new_count = 0
        for line in self.lines[1:]:
            if line.type == DiffLineType.HUNK:
                raise DiffModelError(
                    f"Hunk at {self.unified_diff_start} contains more than one @@ marker"
                )
            if line.type != DiffLineType.ADD:
                old_count += 1
            if line.type != DiffLineType.DELETE:
                new_count += 1
        if (old_count, new_count) != (self.old_count, self.new_count):
            raise DiffModelError(
                f"Hunk {self.header()!r} has {old_count} old and {new_count} new lines"
            )


@dataclass(frozen=True)
class Diff:
    """All hunks detected for one file, in order.

    Hunks must tile the absolute index space: each hunk starts exactly where
    the previous one ended.
    """

    hunks: tuple[DiffHunk, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple
        object.__setattr__(self, "hunks", tuple(self.hunks))
        expected_start: Optional[int] = None
        for hunk in self.hunks:
            if hunk.unified_diff_start < 0:
                raise DiffModelError("unified_diff_start cannot be negative")
            if expected_start is not None and hunk.unified_diff_start != expected_start:
                raise DiffModelError(
                    f"Hunk {hunk.header()!r} starts at {hunk.unified_diff_start}, "
                    f"expected {expected_start}"
                )
            hunk._validate()
            expected_start = hunk.unified_diff_end

    @property
    def first_index(self) -> int:
        return self.hunks[0].unified_diff_start if self.hunks else 0

    @property
    def line_count(self) -> int:
        """Absolute index one past the last addressable line."""
        return self.hunks[-1].unified_diff_end if self.hunks else 0

    def contains_index(self, index: int) -> bool:
        return self.first_index <= index < self.line_count

    def hunk_for_index(self, index: int) -> DiffHunk:
        """Return the hunk containing an absolute index.

        Raises:
            IndexError: If the index is not part of the diff.
        """
        for hunk in self.hunks:
            if hunk.unified_diff_start <= index < hunk.unified_diff_end:
                return hunk
        raise IndexError(f"Line {index} is outside the diff (0..{self.line_count - 1})")

    def line_at(self, index: int) -> DiffLine:
        hunk = self.hunk_for_index(index)
        return hunk.lines[index - hunk.unified_diff_start]

    def selectable_indices(self) -> list[int]:
        """Absolute indices of every added or deleted line in the diff."""
        indices: list[int] = []
        for hunk in self.hunks:
            indices.extend(hunk.changed_line_indices())
        return indices

    def hunk_line_indices(self, hunk_index: int) -> list[int]:
        """Absolute indices of the changed lines of the hunk at ``hunk_index``."""
        return self.hunks[hunk_index].changed_line_indices()


@dataclass
class FileDiff:
    """Diff for a single file block of git output."""

    file_path: str
    diff_header_lines: list[str]  # From 'diff --git' up to first @@
    diff: Diff = field(default_factory=Diff)
    is_binary: bool = False
    is_new_file: bool = False
    is_deleted_file: bool = False
    is_renamed: bool = False
    old_path: Optional[str] = None  # For renames


def format_hunk_header(
    old_start: int, old_count: int, new_start: int, new_count: int, trailer: str = ""
) -> str:
    """Build a ``@@ -a,b +c,d @@`` line; ``trailer`` is appended verbatim."""
    return f"@@ -{old_start},{old_count} +{new_start},{new_count} @@{trailer}"
