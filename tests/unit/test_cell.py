"""
Unit tests for Cell class.

Tests cell state management, open/flag behavior, and observation conversion.
"""
import pytest
from minesweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_has_no_bomb(self) -> None:
        """New cell should not hold a bomb by default."""
        cell = Cell(2, 3)
        assert cell.has_bomb is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell(2, 3)
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_opened is False
        assert cell.is_flagged is False

    def test_default_cell_has_zero_bombs_near(self) -> None:
        """New cell should have 0 bombs near by default."""
        assert Cell(2, 3).bombs_near == 0

    def test_cell_keeps_position(self) -> None:
        """Cell should remember its coordinates."""
        cell = Cell(2, 3)
        assert (cell.row, cell.column) == (2, 3)
        assert cell.position == (2, 3)


# ============================================================================
# Cell Open Tests
# ============================================================================

class TestCellOpen:
    """Test cell open behavior."""

    def test_open_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Opening a hidden cell should succeed."""
        assert hidden_cell.open() is True
        assert hidden_cell.is_opened is True

    def test_open_already_opened_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Opening an already opened cell should fail."""
        hidden_cell.open()
        assert hidden_cell.open() is False

    def test_open_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot open a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.open() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_changes_state_to_flagged(self, hidden_cell: Cell) -> None:
        """Flagging a cell should change its state."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_opened_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag an opened cell."""
        hidden_cell.open()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_opened is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        """Flagged cell should return -2."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_opened_cell_observation_matches_count(self, count: int) -> None:
        """Opened cell returns its neighbor bomb count."""
        cell = Cell(0, 0, bombs_near=count)
        cell.open()
        assert cell.to_observation() == count

    def test_opened_bomb_observation_is_nine(self, bomb_cell: Cell) -> None:
        """Opened bomb should return 9."""
        bomb_cell.open()
        assert bomb_cell.to_observation() == 9


# ============================================================================
# Cell Debug Character Tests
# ============================================================================

class TestCellChar:
    """Test the debug character of a cell."""

    def test_bomb_is_star(self, bomb_cell: Cell) -> None:
        assert bomb_cell.to_char() == "*"

    def test_flagged_bomb_is_still_star(self, bomb_cell: Cell) -> None:
        """Bombs win over flags in the debug view."""
        bomb_cell.toggle_flag()
        assert bomb_cell.to_char() == "*"

    def test_flagged_cell_is_bang(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        assert hidden_cell.to_char() == "!"

    def test_numbered_cell_is_digit(self) -> None:
        assert Cell(0, 0, bombs_near=4).to_char() == "4"

    def test_empty_cell_is_space(self, hidden_cell: Cell) -> None:
        assert hidden_cell.to_char() == " "
