"""Partial staging for hunkstage - turn line selections into patches.

This package provides:
- models: DiffSelection, DiffSelectionType, FileStatus, WorkingDirectoryFileChange
- patch: create_patches_for_modified_file, format_hunk_patch,
         validate_selection, combine_patches
- exceptions: PatchFormatError, OutOfRangeSelectionError, UnsupportedChangeKindError
"""

# Models
from hunkstage.staging.models import (
    DiffSelection,
    DiffSelectionType,
    FileStatus,
    WorkingDirectoryFileChange,
)

# Exceptions
from hunkstage.staging.exceptions import (
    OutOfRangeSelectionError,
    PatchFormatError,
    UnsupportedChangeKindError,
)

# Patch formatter
from hunkstage.staging.patch import (
    combine_patches,
    create_patches_for_modified_file,
    format_hunk_patch,
    validate_selection,
)


__all__ = [
    # Models
    "DiffSelection",
    "DiffSelectionType",
    "FileStatus",
    "WorkingDirectoryFileChange",
    # Exceptions
    "PatchFormatError",
    "OutOfRangeSelectionError",
    "UnsupportedChangeKindError",
    # Patch
    "create_patches_for_modified_file",
    "format_hunk_patch",
    "validate_selection",
    "combine_patches",
]
