"""Git integration for hunkstage.

This package provides:
- exceptions: GitError, NoUnstagedChangesError, PatchApplyError
- runner: _run_git_command, get_repo_root
- diff: get_file_diff
- status: get_file_status
- apply: apply_patch_to_index
"""

# Exceptions
from hunkstage.git.exceptions import (
    GitError,
    NoUnstagedChangesError,
    PatchApplyError,
)

# Runner utilities
from hunkstage.git.runner import (
    _run_git_command,
    get_repo_root,
)

# Diff utilities
from hunkstage.git.diff import (
    get_file_diff,
)

# Status utilities
from hunkstage.git.status import (
    get_file_status,
)

# Patch application
from hunkstage.git.apply import (
    apply_patch_to_index,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoUnstagedChangesError",
    "PatchApplyError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Diff
    "get_file_diff",
    # Status
    "get_file_status",
    # Apply
    "apply_patch_to_index",
]
