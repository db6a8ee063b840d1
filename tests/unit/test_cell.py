"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, and observation codes.
"""
import pytest
from minestack import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.has_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_no_end_marks(self) -> None:
        """New cell is neither triggered nor misflagged."""
        cell = Cell()
        assert cell.was_triggered is False
        assert cell.is_misflagged is False

    def test_cell_keeps_position(self) -> None:
        """Cell remembers its coordinates."""
        cell = Cell(x=3, y=5)
        assert cell.position == (3, 5)

    def test_zero_cell(self) -> None:
        """Only safe cells without adjacent mines are zero-cells."""
        assert Cell().is_zero is True
        assert Cell(adjacent_mines=2).is_zero is False
        assert Cell(has_mine=True).is_zero is False


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_revealed is True

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True
        assert hidden_cell.is_revealed is False


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

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_flagged is False


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation codes."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        """Flagged cell should return -2."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    def test_misflagged_cell_observation(self, hidden_cell: Cell) -> None:
        """Misflagged cell should return -3."""
        hidden_cell.toggle_flag()
        hidden_cell.is_misflagged = True
        assert hidden_cell.to_observation() == -3

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed cell returns its adjacent mine count."""
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9

    def test_triggered_mine_observation(self, mine_cell: Cell) -> None:
        """The mine that was set off returns 10."""
        mine_cell.was_triggered = True
        mine_cell.reveal()
        assert mine_cell.to_observation() == 10
