"""Git diff utilities.

Contains:
- get_file_diff: Get the unstaged diff of a single file
"""

from pathlib import Path
from typing import Optional

from hunkstage.git.exceptions import NoUnstagedChangesError
from hunkstage.git.runner import _run_git_command


def get_file_diff(path: str, context_lines: int = 3, repo_root: Optional[Path] = None) -> str:
    """Get the diff between the index and the working tree for one file.

    External diff drivers and color are disabled so the output is plain
    unified diff text.

    Args:
        path: File path relative to the repository root.
        context_lines: Number of context lines around each change.
        repo_root: The root directory of the git repository (optional).

    Returns:
        The raw diff text.

    Raises:
        NoUnstagedChangesError: If the file has no unstaged changes.
    """
    diff = _run_git_command(
        ["diff", "--no-color", "--no-ext-diff", f"-U{context_lines}", "--", path],
        cwd=repo_root,
        strip=False,
    )
    if not diff.strip():
        raise NoUnstagedChangesError(f"No unstaged changes found in {path}")
    return diff
