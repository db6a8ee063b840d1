"""
Layer module for layered Minesweeper.

A layer is one independent board: it owns its grid of cells and runs the
reveal/flag state machine, flood fill, and win/loss detection.
"""
import logging
from collections import deque
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .generator import (
    BoardConfig, Grid, RandomSource, build_grid, generate, get_neighbors,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a layer or of the whole session."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Layer Class
# ============================================================================

class Layer:
    """
    One Minesweeper board within a session.

    PLAYING moves to WON or LOST exactly once; both are terminal and every
    mutator is a no-op afterwards.
    """

    def __init__(
        self, config: BoardConfig, grid: Grid, layer_id: int = 0
    ) -> None:
        """
        Initialize a layer around an already generated grid.

        Args:
            config: Board dimensions and mine count.
            grid: Row-major grid matching ``config``.
            layer_id: Stable identity, independent of list position.
        """
        self.config = config
        self.layer_id = layer_id
        self._grid = grid
        self._status = GameState.PLAYING
        self._revealed_count = 0
        self._flags_used = 0

    @classmethod
    def generate(
        cls,
        config: BoardConfig,
        layer_id: int = 0,
        rng: RandomSource = None,
    ) -> "Layer":
        """Create a layer with randomly placed mines."""
        return cls(config, generate(config, rng), layer_id)

    @classmethod
    def from_mines(
        cls,
        width: int,
        height: int,
        mines: Iterable[Tuple[int, int]],
        layer_id: int = 0,
    ) -> "Layer":
        """Create a layer with mines at the given (x, y) positions."""
        mine_set = set(mines)
        config = BoardConfig(width, height, len(mine_set))
        return cls(config, build_grid(width, height, mine_set), layer_id)

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal the cell at (x, y).

        A mine loses the layer. A safe cell starts a flood reveal and is
        followed by the win check.

        Returns:
            True if anything changed, False for an ignored request.
        """
        if self._status != GameState.PLAYING:
            return False
        cell = self.get_cell(x, y)
        if cell is None or not cell.is_hidden:
            return False

        if cell.has_mine:
            self._detonate(cell)
        else:
            self._flood_reveal(cell)
            self._check_win()
        return True

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle the flag on the cell at (x, y).

        Returns:
            True if the flag changed, False otherwise.
        """
        if self._status != GameState.PLAYING:
            return False
        cell = self.get_cell(x, y)
        if cell is None or not cell.toggle_flag():
            return False
        self._flags_used += 1 if cell.is_flagged else -1
        return True

    def _reveal_one(self, cell: Cell) -> bool:
        if not cell.reveal():
            return False
        self._revealed_count += 1
        return True

    def _flood_reveal(self, seed: Cell) -> None:
        """
        Reveal ``seed`` and every cell reachable through zero-cells.

        Flagged cells are never revealed, so they stop the expansion.
        """
        if seed.has_mine or not self._reveal_one(seed):
            return
        width, height = self.config.width, self.config.height
        queue = deque()
        if seed.is_zero:
            queue.append(seed)
        revealed = 1

        while queue:
            current = queue.popleft()
            for neighbor_x, neighbor_y in get_neighbors(
                current.x, current.y, width, height
            ):
                neighbor = self._grid[neighbor_y][neighbor_x]
                if neighbor.has_mine or not self._reveal_one(neighbor):
                    continue
                revealed += 1
                if neighbor.is_zero:
                    queue.append(neighbor)

        logger.debug(
            "Layer %d: reveal at (%d, %d) opened %d cells",
            self.layer_id, seed.x, seed.y, revealed,
        )

    def _detonate(self, cell: Cell) -> None:
        """Lose the layer on ``cell`` and expose the end-of-game state."""
        cell.was_triggered = True
        self._reveal_one(cell)
        self._status = GameState.LOST
        self.reveal_all_mines()
        for other in self.cells():
            if other.is_flagged and not other.has_mine:
                other.is_misflagged = True
        logger.info(
            "Layer %d lost on mine at (%d, %d)", self.layer_id, cell.x, cell.y
        )

    def _check_win(self) -> None:
        """Win once every safe cell is revealed, then flag the mines."""
        if self._revealed_count < self.config.safe_cells:
            return
        self._status = GameState.WON
        for cell in self.mine_cells():
            if cell.is_hidden and cell.toggle_flag():
                self._flags_used += 1
        logger.info("Layer %d won", self.layer_id)

    def reveal_all_mines(self) -> int:
        """
        Reveal every hidden mine. Flagged mines keep their flag.

        Returns:
            Number of mines newly revealed. Flagged mines stay hidden and
            are not counted.
        """
        count = 0
        for cell in self.mine_cells():
            if self._reveal_one(cell):
                count += 1
        return count

    def mark_cleared(self) -> None:
        """Finish a layer that was solved by flagging alone."""
        if self._status == GameState.PLAYING:
            self._status = GameState.WON

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mines(self) -> int:
        return self.config.num_mines

    @property
    def status(self) -> GameState:
        """Get current layer state."""
        return self._status

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def flags_used(self) -> int:
        return self._flags_used

    @property
    def is_playing(self) -> bool:
        return self._status == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._status == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._status == GameState.LOST

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if out of bounds."""
        if not (0 <= x < self.config.width and 0 <= y < self.config.height):
            return None
        return self._grid[y][x]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell, row by row."""
        for row in self._grid:
            yield from row

    def mine_cells(self) -> List[Cell]:
        return [cell for cell in self.cells() if cell.has_mine]

    def count_revealed(self) -> int:
        """Count revealed cells by scanning the grid."""
        return sum(1 for cell in self.cells() if cell.is_revealed)

    def is_flag_complete(self) -> bool:
        """Check that the flags sit on exactly the mines and nothing else."""
        return all(cell.is_flagged == cell.has_mine for cell in self.cells())

    def get_observation(self) -> np.ndarray:
        """
        Get layer state as a numpy array.

        Returns:
            int8 array of shape (height, width); see Cell.to_observation.
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for cell in self.cells():
            obs[cell.y, cell.x] = cell.to_observation()
        return obs

    def __repr__(self) -> str:
        return (
            f"Layer(id={self.layer_id}, {self.width}x{self.height}, "
            f"mines={self.mines}, status={self._status.name})"
        )
