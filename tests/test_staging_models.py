"""Tests for hunkstage.staging.models module."""

import pytest
from pydantic import ValidationError

from hunkstage.staging import (
    DiffSelection,
    DiffSelectionType,
    FileStatus,
    WorkingDirectoryFileChange,
)


class TestDiffSelection:
    """Tests for DiffSelection model."""

    def test_default_selects_everything(self):
        """Test that a bare selection is ALL."""
        selection = DiffSelection()

        assert selection.selection_type == DiffSelectionType.ALL
        assert selection.is_selected(0)
        assert selection.is_selected(999)

    def test_none_selects_nothing(self):
        """Test NONE mode ignores the map."""
        selection = DiffSelection(
            selection_type=DiffSelectionType.NONE, selected_lines={3: True}
        )

        assert not selection.is_selected(3)

    def test_partial_uses_map(self):
        """Test PARTIAL mode lookups."""
        selection = DiffSelection(
            selection_type=DiffSelectionType.PARTIAL,
            selected_lines={3: True, 4: False},
        )

        assert selection.is_selected(3)
        assert not selection.is_selected(4)
        assert not selection.is_selected(5)

    def test_with_line_selection_returns_copy(self):
        """Test that builders leave the original untouched."""
        original = DiffSelection(
            selection_type=DiffSelectionType.PARTIAL, selected_lines={3: True}
        )

        updated = original.with_line_selection(4, True)

        assert updated.selected_lines == {3: True, 4: True}
        assert original.selected_lines == {3: True}

    def test_with_range_selection(self):
        """Test setting consecutive indices."""
        selection = DiffSelection(selection_type=DiffSelectionType.NONE)

        updated = selection.with_range_selection(5, 3, True)

        assert updated.selection_type == DiffSelectionType.PARTIAL
        assert updated.selected_lines == {5: True, 6: True, 7: True}

    def test_for_indices_expands_mode(self):
        """Test turning ALL into an explicit map before toggling."""
        selection = DiffSelection().for_indices([1, 2, 3]).with_line_selection(2, False)

        assert selection.selection_type == DiffSelectionType.PARTIAL
        assert selection.selected_lines == {1: True, 2: False, 3: True}

    def test_select_all_and_none(self):
        """Test mode reset builders."""
        selection = DiffSelection(
            selection_type=DiffSelectionType.PARTIAL, selected_lines={1: True}
        )

        assert selection.with_select_all().selection_type == DiffSelectionType.ALL
        assert selection.with_select_none().selection_type == DiffSelectionType.NONE
        assert selection.with_select_none().selected_lines == {}

    def test_is_frozen(self):
        """Test that selections cannot be modified in place."""
        selection = DiffSelection()

        with pytest.raises(ValidationError):
            selection.selection_type = DiffSelectionType.NONE

    def test_selected_lines_are_read_only(self):
        """Test that the line map cannot be changed after construction."""
        source = {3: True}
        selection = DiffSelection(
            selection_type=DiffSelectionType.PARTIAL, selected_lines=source
        )

        with pytest.raises(TypeError):
            selection.selected_lines[4] = True

        source[5] = True
        assert not selection.is_selected(5)
        assert selection.selected_lines == {3: True}

    def test_loads_from_json(self):
        """Test parsing the --selection-file format."""
        selection = DiffSelection.model_validate_json(
            '{"selection_type": "partial", "selected_lines": {"4": true, "9": false}}'
        )

        assert selection.selection_type == DiffSelectionType.PARTIAL
        assert selection.selected_lines == {4: True, 9: False}

    def test_rejects_unknown_mode(self):
        """Test that invalid JSON modes fail validation."""
        with pytest.raises(ValidationError):
            DiffSelection.model_validate_json('{"selection_type": "some"}')


class TestWorkingDirectoryFileChange:
    """Tests for WorkingDirectoryFileChange model."""

    def test_with_selection(self):
        """Test replacing the selection."""
        change = WorkingDirectoryFileChange(path="a.txt", status=FileStatus.MODIFIED)
        selection = DiffSelection(selection_type=DiffSelectionType.NONE)

        updated = change.with_selection(selection)

        assert updated.selection == selection
        assert updated.path == "a.txt"
        assert change.selection.selection_type == DiffSelectionType.ALL
