"""Patch application utilities.

Contains:
- apply_patch_to_index: Apply one patch to the index
"""

import logging
from pathlib import Path
from typing import Optional

from hunkstage.git.exceptions import GitError, PatchApplyError
from hunkstage.git.runner import _run_git_command

logger = logging.getLogger(__name__)


def apply_patch_to_index(
    patch: str, repo_root: Optional[Path] = None, check_first: bool = True
) -> None:
    """Apply a patch to the index without touching the working tree.

    Args:
        patch: Unified diff text.
        repo_root: The root directory of the git repository (optional).
        check_first: Run 'git apply --check' before applying.

    Raises:
        PatchApplyError: If git rejects the patch.
    """
    logger.debug("Applying %d-line patch to index", patch.count("\n"))
    try:
        if check_first:
            _run_git_command(["apply", "--cached", "--check", "-"], cwd=repo_root, input_text=patch)
        _run_git_command(["apply", "--cached", "-"], cwd=repo_root, input_text=patch)
    except GitError as e:
        raise PatchApplyError(f"Failed to apply patch to index: {e}")
