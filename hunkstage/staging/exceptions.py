"""Staging-related exception classes.

Contains all exception classes for patch formatting:
- PatchFormatError: Base exception for formatter contract violations
- OutOfRangeSelectionError: Selection references a line the diff lacks
- UnsupportedChangeKindError: File change is not an in-place modification
"""


class PatchFormatError(Exception):
    """Base exception for patch formatting errors."""

    pass


class OutOfRangeSelectionError(PatchFormatError):
    """Raised when a selection references a line outside the diff."""

    def __init__(self, index: int, first_index: int, line_count: int):
        self.index = index
        self.first_index = first_index
        self.line_count = line_count
        super().__init__(
            f"Selected line {index} is outside the diff "
            f"(addressable lines {first_index}..{line_count - 1})"
        )


class UnsupportedChangeKindError(PatchFormatError):
    """Raised when partial patches are requested for a non-modified file."""

    def __init__(self, path: str, status):
        self.path = path
        self.status = status
        status_name = getattr(status, "value", status)
        super().__init__(
            f"Cannot create partial patches for {path}: status is {status_name}, expected modified"
        )
