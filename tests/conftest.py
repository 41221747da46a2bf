"""Shared test fixtures and configuration."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from hunkstage.diff import parse_file_diff


MODIFIED_FILE_DIFF = """diff --git a/modified-file.md b/modified-file.md
index 1234567..89abcde 100644
--- a/modified-file.md
+++ b/modified-file.md
@@ -4,10 +4,6 @@ ## Section
 line 4
 line 5
 line 6
-line 7
-line 8
-line 9
-line 10
-line 11
+line 7 rewritten
 line 12
 line 13
@@ -21,6 +17,10 @@
 line 21
 line 22
 line 23
-line 24
+line 24 changed
+new line a
+new line b
+new line c
+new line d
 line 25
 line 26
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def modified_file_diff_text():
    """Two-hunk diff of modified-file.md as printed by git diff.

    Absolute indices: hunk 0 spans 0-11 (deletions 4-8, addition 9),
    hunk 1 spans 12-23 (deletion 16, additions 17-21).
    """
    return MODIFIED_FILE_DIFF


@pytest.fixture
def modified_file_diff(modified_file_diff_text):
    """Parsed Diff for modified-file.md."""
    return parse_file_diff(modified_file_diff_text)


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository for testing."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    subprocess.run(["git", "init"], cwd=repo_dir, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"],
        cwd=repo_dir,
        capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=repo_dir,
        capture_output=True,
    )
    return repo_dir
