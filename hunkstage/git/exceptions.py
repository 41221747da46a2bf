"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NoUnstagedChangesError: Raised when a file has nothing left to stage
- PatchApplyError: Raised when git refuses a patch
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NoUnstagedChangesError(GitError):
    """Raised when a file has no unstaged changes."""

    pass


class PatchApplyError(GitError):
    """Raised when a patch cannot be applied to the index."""

    pass
