"""
Cell module for layered Minesweeper.

Represents individual cells on a layer with their state
(hidden/revealed/flagged), content (mine/number) and end-of-game marks.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MISFLAGGED = -3
OBS_MINE = 9
OBS_TRIGGERED = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in a layer grid.

    Attributes:
        x: Column of the cell within its layer.
        y: Row of the cell within its layer.
        has_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        was_triggered: Set on the one mine whose reveal lost the layer.
        is_misflagged: Set on flagged safe cells once the layer is lost.
    """

    x: int = 0
    y: int = 0
    has_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    was_triggered: bool = False
    is_misflagged: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def position(self) -> Tuple[int, int]:
        """Get the (x, y) coordinates of the cell."""
        return self.x, self.y

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_zero(self) -> bool:
        """Check if cell is safe with no mines around it."""
        return not self.has_mine and self.adjacent_mines == 0

    def to_observation(self) -> int:
        """
        Convert cell to a single integer for array export.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Flagged safe cell on a lost layer
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10: The mine that was triggered
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_MISFLAGGED if self.is_misflagged else OBS_FLAGGED
        if self.has_mine:
            return OBS_TRIGGERED if self.was_triggered else OBS_MINE
        return self.adjacent_mines
