"""Tests for hunkstage.cli module."""

import json

import pytest
from typer.testing import CliRunner

from hunkstage.cli import app
from hunkstage.cli.utils import SelectionSpecError, build_selection, parse_index_spec
from hunkstage.git import GitError, NoUnstagedChangesError, PatchApplyError
from hunkstage.staging import DiffSelectionType, FileStatus


runner = CliRunner()


@pytest.fixture
def mock_repo(mocker, temp_dir, modified_file_diff_text):
    """Point the CLI at a fake repository holding modified-file.md."""
    mocker.patch("hunkstage.cli.utils.get_repo_root", return_value=temp_dir)
    mocker.patch("hunkstage.cli.utils.get_file_status", return_value=FileStatus.MODIFIED)
    mock_diff = mocker.patch(
        "hunkstage.cli.utils.get_file_diff", return_value=modified_file_diff_text
    )
    return {"root": temp_dir, "path": str(temp_dir / "modified-file.md"), "diff": mock_diff}


# ============================================================================
# Helper Tests
# ============================================================================


class TestParseIndexSpec:
    """Tests for parse_index_spec function."""

    def test_numbers_and_ranges(self):
        """Test mixing single indices and ranges."""
        assert parse_index_spec("9,4-6, 2") == [2, 4, 5, 6, 9]

    @pytest.mark.parametrize("spec", ["a", "3-", "5-2", "", "1;2"])
    def test_invalid_specs(self, spec):
        """Test rejection of malformed specs."""
        with pytest.raises(SelectionSpecError):
            parse_index_spec(spec)


class TestBuildSelection:
    """Tests for build_selection function."""

    def test_nothing_requested(self, modified_file_diff):
        """Test that no options yields no selection."""
        assert build_selection(modified_file_diff) is None

    def test_select_all(self, modified_file_diff):
        """Test --all."""
        selection = build_selection(modified_file_diff, select_all=True)

        assert selection.selection_type == DiffSelectionType.ALL

    def test_lines_and_hunks_combine(self, modified_file_diff):
        """Test that --lines and --hunks add up."""
        selection = build_selection(modified_file_diff, lines="16", hunks="0")

        assert selection.selection_type == DiffSelectionType.PARTIAL
        assert [i for i, flag in selection.selected_lines.items() if flag] == [4, 5, 6, 7, 8, 9, 16]
        assert selection.selected_lines[17] is False

    def test_unknown_hunk(self, modified_file_diff):
        """Test a hunk number past the end."""
        with pytest.raises(SelectionSpecError) as exc_info:
            build_selection(modified_file_diff, hunks="2")

        assert "Hunk 2 does not exist" in str(exc_info.value)

    def test_selection_file(self, modified_file_diff, temp_dir):
        """Test loading a JSON selection."""
        selection_file = temp_dir / "selection.json"
        selection_file.write_text(
            json.dumps({"selection_type": "partial", "selected_lines": {"9": True}})
        )

        selection = build_selection(modified_file_diff, selection_file=selection_file)

        assert selection.selected_lines == {9: True}

    def test_invalid_selection_file(self, modified_file_diff, temp_dir):
        """Test a selection file that fails validation."""
        selection_file = temp_dir / "selection.json"
        selection_file.write_text('{"selection_type": "maybe"}')

        with pytest.raises(SelectionSpecError):
            build_selection(modified_file_diff, selection_file=selection_file)


# ============================================================================
# Command Tests
# ============================================================================


class TestShowCommand:
    """Tests for hunkstage show command."""

    def test_lists_selectable_lines(self, mock_repo):
        """Test that changed lines are labelled with absolute indices."""
        result = runner.invoke(app, ["show", mock_repo["path"]])

        assert result.exit_code == 0
        assert "modified-file.md (modified): 2 hunk(s)" in result.output
        assert "Hunk 0  @@ -4,10 +4,6 @@ ## Section" in result.output
        assert "     4  -line 7" in result.output
        assert "    17  +line 24 changed" in result.output
        assert "        line 4" in result.output

    def test_context_option(self, mock_repo):
        """Test that -U is passed to git diff."""
        runner.invoke(app, ["show", mock_repo["path"], "-U", "1"])

        assert mock_repo["diff"].call_args.kwargs["context_lines"] == 1

    def test_handles_git_error(self, mocker, temp_dir):
        """Test handling of git error."""
        mocker.patch("hunkstage.cli.utils.get_repo_root", side_effect=GitError("not a repo"))

        result = runner.invoke(app, ["show", "file.txt"])

        assert result.exit_code == 1
        assert "Error: not a repo" in result.output

    def test_handles_clean_file(self, mock_repo):
        """Test a file without unstaged changes."""
        mock_repo["diff"].side_effect = NoUnstagedChangesError("No unstaged changes found in x")

        result = runner.invoke(app, ["show", mock_repo["path"]])

        assert result.exit_code == 1
        assert "No unstaged changes" in result.output

    def test_rejects_binary_diff(self, mock_repo):
        """Test that a binary diff is reported instead of shown as empty."""
        mock_repo["diff"].return_value = (
            "diff --git a/logo.png b/logo.png\n"
            "index 1234567..89abcde 100644\n"
            "Binary files a/logo.png and b/logo.png differ\n"
        )

        result = runner.invoke(app, ["show", mock_repo["path"]])

        assert result.exit_code == 1
        assert "binary file" in result.output

    def test_rejects_output_without_file_block(self, mock_repo):
        """Test git output that holds no diff --git block."""
        mock_repo["diff"].return_value = "warning: something odd\n"

        result = runner.invoke(app, ["show", mock_repo["path"]])

        assert result.exit_code == 1
        assert "No file diff found" in result.output


class TestPatchCommand:
    """Tests for hunkstage patch command."""

    def test_prints_selected_hunk(self, mock_repo):
        """Test printing the patch for hunk 0 only."""
        result = runner.invoke(app, ["patch", mock_repo["path"], "--hunks", "0", "--no-color"])

        assert result.exit_code == 0
        assert "--- a/modified-file.md\n+++ b/modified-file.md\n@@ -4,10 +4,6 @@ ## Section\n" in result.output
        assert "Hunk 1: nothing selected" in result.output
        assert "@@ -21,6" not in result.output

    def test_color_output(self, mock_repo):
        """Test that --color adds ANSI codes."""
        result = runner.invoke(app, ["patch", mock_repo["path"], "--all", "--color"])

        assert result.exit_code == 0
        assert "\033[32m+line 7 rewritten\033[0m" in result.output

    def test_requires_selection(self, mock_repo):
        """Test running without any selection option."""
        result = runner.invoke(app, ["patch", mock_repo["path"]])

        assert result.exit_code == 1
        assert "Nothing selected" in result.output

    def test_out_of_range_line(self, mock_repo):
        """Test a line index past the end of the diff."""
        result = runner.invoke(app, ["patch", mock_repo["path"], "--lines", "40"])

        assert result.exit_code == 1
        assert "outside the diff" in result.output

    def test_rejects_new_file(self, mock_repo, mocker):
        """Test that partial patches need a modified file."""
        mocker.patch("hunkstage.cli.utils.get_file_status", return_value=FileStatus.NEW)

        result = runner.invoke(app, ["patch", mock_repo["path"], "--all"])

        assert result.exit_code == 1
        assert "expected modified" in result.output

    def test_new_file_header_overrides_status(self, mock_repo):
        """Test that a new-file diff is rejected even if status says modified."""
        mock_repo["diff"].return_value = (
            "diff --git a/modified-file.md b/modified-file.md\n"
            "new file mode 100644\n"
            "index 0000000..89abcde\n"
            "--- /dev/null\n"
            "+++ b/modified-file.md\n"
            "@@ -0,0 +1,2 @@\n"
            "+line 1\n"
            "+line 2\n"
        )

        result = runner.invoke(app, ["patch", mock_repo["path"], "--all"])

        assert result.exit_code == 1
        assert "status is new, expected modified" in result.output


class TestStageCommand:
    """Tests for hunkstage stage command."""

    def test_applies_selected_patches(self, mock_repo, mocker):
        """Test staging a single line."""
        mock_apply = mocker.patch("hunkstage.cli.stage.apply_patch_to_index")

        result = runner.invoke(app, ["stage", mock_repo["path"], "--lines", "16"])

        assert result.exit_code == 0
        assert "Staged 1 of 2 hunk(s) in modified-file.md" in result.output
        patch = mock_apply.call_args.args[0]
        assert patch.count("@@ -") == 1
        assert "-line 24\n" in patch
        assert mock_apply.call_args.kwargs == {"repo_root": mock_repo["root"], "check_first": True}

    def test_stages_all_hunks_in_one_patch(self, mock_repo, mocker):
        """Test that every selected hunk goes to git in a single apply."""
        mock_apply = mocker.patch("hunkstage.cli.stage.apply_patch_to_index")

        result = runner.invoke(app, ["stage", mock_repo["path"], "--all"])

        assert result.exit_code == 0
        assert "Staged 2 of 2 hunk(s)" in result.output
        mock_apply.assert_called_once()
        patch = mock_apply.call_args.args[0]
        assert patch.startswith("--- a/modified-file.md\n+++ b/modified-file.md\n")
        assert patch.count("--- a/") == 1
        assert patch.count("@@ -") == 2

    def test_dry_run(self, mock_repo, mocker):
        """Test that --dry-run does not touch the index."""
        mock_apply = mocker.patch("hunkstage.cli.stage.apply_patch_to_index")

        result = runner.invoke(app, ["stage", mock_repo["path"], "--all", "--dry-run"])

        assert result.exit_code == 0
        assert "Would stage 2 of 2 hunk(s)" in result.output
        mock_apply.assert_not_called()

    def test_nothing_to_stage(self, mock_repo, mocker):
        """Test a selection that yields no patches."""
        mock_apply = mocker.patch("hunkstage.cli.stage.apply_patch_to_index")

        result = runner.invoke(app, ["stage", mock_repo["path"], "--lines", "1"])

        assert result.exit_code == 0
        assert "Nothing to stage" in result.output
        mock_apply.assert_not_called()

    def test_apply_failure(self, mock_repo, mocker):
        """Test reporting a patch git refuses."""
        mocker.patch(
            "hunkstage.cli.stage.apply_patch_to_index",
            side_effect=PatchApplyError("Failed to apply patch to index: corrupt patch"),
        )

        result = runner.invoke(app, ["stage", mock_repo["path"], "--all"])

        assert result.exit_code == 1
        assert "corrupt patch" in result.output


class TestConfigCommands:
    """Tests for hunkstage config commands."""

    def test_show(self, mocker, temp_dir):
        """Test listing settings."""
        mocker.patch("hunkstage.cli.config.get_repo_root", return_value=temp_dir)

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "context_lines: 3" in result.output

    def test_set(self, mocker, temp_dir):
        """Test changing a setting."""
        mocker.patch("hunkstage.cli.config.get_repo_root", return_value=temp_dir)

        result = runner.invoke(app, ["config", "set", "context_lines", "6"])

        assert result.exit_code == 0
        assert "Set context_lines = 6" in result.output

    def test_set_invalid(self, mocker, temp_dir):
        """Test rejecting a bad value."""
        mocker.patch("hunkstage.cli.config.get_repo_root", return_value=temp_dir)

        result = runner.invoke(app, ["config", "set", "color", "sometimes"])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestRootCommand:
    """Tests for the root callback."""

    def test_version(self):
        """Test --version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "hunkstage" in result.output
