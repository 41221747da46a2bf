"""Git status utilities.

Contains:
- get_file_status: Get the working directory status of a single file
- _parse_status_code: Map a porcelain XY code to a FileStatus
"""

from pathlib import Path
from typing import Optional

from hunkstage.git.runner import _run_git_command
from hunkstage.staging.models import FileStatus


def _parse_status_code(code: str) -> FileStatus:
    """Map a two-column porcelain status code to a FileStatus.

    The porcelain format uses two columns:
    - First column: staged status (index)
    - Second column: worktree status

    Args:
        code: The XY code, e.g. " M", "??", "UU".

    Returns:
        The matching FileStatus.
    """
    if "U" in code or code in ("AA", "DD"):
        return FileStatus.CONFLICTED
    if "R" in code:
        return FileStatus.RENAMED
    if code == "??" or code.startswith("A"):
        return FileStatus.NEW
    if "D" in code:
        return FileStatus.DELETED
    if "M" in code or "T" in code:
        return FileStatus.MODIFIED
    return FileStatus.UNKNOWN


def get_file_status(path: str, repo_root: Optional[Path] = None) -> FileStatus:
    """Get the working directory status of a file.

    Args:
        path: File path relative to the repository root.
        repo_root: The root directory of the git repository (optional).

    Returns:
        The file's status, UNKNOWN if git reports nothing for it.
    """
    output = _run_git_command(
        ["status", "--porcelain=v1", "--untracked-files=all", "--", path],
        cwd=repo_root,
        strip=False,
    )
    for line in output.split("\n"):
        if len(line) >= 3:
            return _parse_status_code(line[:2])
    return FileStatus.UNKNOWN
