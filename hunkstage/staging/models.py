"""Data models for hunkstage staging module.

Contains:
- DiffSelectionType: Overall selection mode for one file
- DiffSelection: Which changed lines of a file are marked for staging
- FileStatus: Working directory status of a file
- WorkingDirectoryFileChange: A changed file together with its selection
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiffSelectionType(Enum):
    """Overall selection mode for one file."""

    ALL = "all"
    NONE = "none"
    PARTIAL = "partial"


class FileStatus(Enum):
    """Working directory status of a file."""

    NEW = "new"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    CONFLICTED = "conflicted"
    UNKNOWN = "unknown"


class DiffSelection(BaseModel):
    """Line-granular selection for one file.

    ``selected_lines`` maps absolute diff line indices to an included flag and
    is only consulted in PARTIAL mode. Indices that are not in the map are
    treated as excluded. The map is stored read-only.
    """

    model_config = ConfigDict(frozen=True)

    selection_type: DiffSelectionType = DiffSelectionType.ALL
    selected_lines: Mapping[int, bool] = Field(default_factory=dict, validate_default=True)

    @field_validator("selected_lines")
    @classmethod
    def freeze_selected_lines(cls, v):
        """Copy the map so callers cannot change it afterwards."""
        return MappingProxyType(dict(v))

    def is_selected(self, index: int) -> bool:
        """Return whether the changed line at ``index`` is included."""
        if self.selection_type == DiffSelectionType.ALL:
            return True
        if self.selection_type == DiffSelectionType.NONE:
            return False
        return self.selected_lines.get(index, False)

    def with_line_selection(self, index: int, selected: bool) -> "DiffSelection":
        """Return a PARTIAL copy with one line toggled."""
        return self.with_range_selection(index, 1, selected)

    def with_range_selection(self, start: int, length: int, selected: bool) -> "DiffSelection":
        """Return a PARTIAL copy with ``length`` consecutive indices set.

        Indices outside the range keep their entry in ``selected_lines``.
        ALL and NONE carry no per-line state, so expand them with
        ``for_indices`` before toggling individual lines.
        """
        lines = dict(self.selected_lines)
        for index in range(start, start + length):
            lines[index] = selected
        return DiffSelection(selection_type=DiffSelectionType.PARTIAL, selected_lines=lines)

    def with_select_all(self) -> "DiffSelection":
        return DiffSelection(selection_type=DiffSelectionType.ALL)

    def with_select_none(self) -> "DiffSelection":
        return DiffSelection(selection_type=DiffSelectionType.NONE)

    def for_indices(self, indices: list[int]) -> "DiffSelection":
        """Expand this selection into an explicit PARTIAL map over ``indices``.

        Useful before toggling single lines of an ALL or NONE selection.
        """
        return DiffSelection(
            selection_type=DiffSelectionType.PARTIAL,
            selected_lines={index: self.is_selected(index) for index in indices},
        )


class WorkingDirectoryFileChange(BaseModel):
    """A changed file in the working directory and its staging selection."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: FileStatus
    selection: DiffSelection = DiffSelection()

    def with_selection(self, selection: DiffSelection) -> "WorkingDirectoryFileChange":
        return WorkingDirectoryFileChange(path=self.path, status=self.status, selection=selection)
