"""
Board generator for layered Minesweeper.

Places mines uniformly at random and precomputes adjacency counts.
Every grid is indexed row-major: ``grid[y][x]``.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)

Grid = List[List[Cell]]
RandomSource = Union[np.random.Generator, int, None]


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a single layer board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 8
    height: int = 8
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ValueError("Board needs at least one mine")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# ============================================================================
# Neighbor Utilities
# ============================================================================

def get_neighbors(
    x: int, y: int, width: int, height: int
) -> List[Tuple[int, int]]:
    """
    Get valid neighboring cell positions.

    Args:
        x: Column of center cell.
        y: Row of center cell.
        width: Number of columns on the board.
        height: Number of rows on the board.

    Returns:
        List of (x, y) tuples for in-bounds neighbors.
    """
    neighbors = []
    for delta_y in (-1, 0, 1):
        for delta_x in (-1, 0, 1):
            if delta_x == 0 and delta_y == 0:
                continue
            new_x = x + delta_x
            new_y = y + delta_y
            if 0 <= new_x < width and 0 <= new_y < height:
                neighbors.append((new_x, new_y))
    return neighbors


def make_rng(rng: RandomSource = None) -> np.random.Generator:
    """Coerce a seed, generator or None into a numpy Generator."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


# ============================================================================
# Generation
# ============================================================================

def place_mines(
    width: int,
    height: int,
    num_mines: int,
    rng: RandomSource = None,
) -> List[Tuple[int, int]]:
    """
    Choose distinct mine positions uniformly at random.

    Shuffles the whole index range and keeps the first ``num_mines``
    entries, so every subset of that size is equally likely.

    Returns:
        List of (x, y) mine positions.
    """
    order = make_rng(rng).permutation(width * height)[:num_mines]
    return [(int(index) % width, int(index) // width) for index in order]


def build_grid(
    width: int, height: int, mines: Iterable[Tuple[int, int]]
) -> Grid:
    """
    Build a grid for a known set of mine positions.

    Args:
        width: Number of columns.
        height: Number of rows.
        mines: (x, y) positions holding a mine.

    Returns:
        Row-major grid with adjacent mine counts precomputed.
    """
    mine_set = set(mines)
    grid = [
        [Cell(x=x, y=y, has_mine=(x, y) in mine_set) for x in range(width)]
        for y in range(height)
    ]
    for row in grid:
        for cell in row:
            if not cell.has_mine:
                cell.adjacent_mines = _count_adjacent_mines(
                    grid, cell.x, cell.y, width, height
                )
    return grid


def _count_adjacent_mines(
    grid: Grid, x: int, y: int, width: int, height: int
) -> int:
    """Count mines adjacent to a specific cell."""
    count = 0
    for neighbor_x, neighbor_y in get_neighbors(x, y, width, height):
        if grid[neighbor_y][neighbor_x].has_mine:
            count += 1
    return count


def generate(config: BoardConfig, rng: RandomSource = None) -> Grid:
    """
    Generate a freshly mined grid.

    No cell is guaranteed safe, including whichever one is revealed first.

    Args:
        config: Board dimensions and mine count.
        rng: Numpy generator, integer seed, or None for fresh entropy.

    Returns:
        Row-major grid of cells.
    """
    mines = place_mines(config.width, config.height, config.num_mines, rng)
    logger.debug(
        "Generated %dx%d board with %d mines",
        config.width, config.height, config.num_mines,
    )
    return build_grid(config.width, config.height, mines)
