"""
Session configuration.

Values are clamped into their bounds instead of rejected, so building a
session from user input never fails.
"""
import math
from dataclasses import dataclass

from .generator import BoardConfig


# ============================================================================
# Bounds
# ============================================================================

MIN_SIZE = 4
MAX_SIZE = 30
MIN_DEPTH = 1
MAX_DEPTH = 10
MIN_DENSITY = 0.05
MAX_DENSITY = 0.4


def clamp(value, low, high):
    """Clamp ``value`` into the closed range [low, high]."""
    return max(low, min(high, value))


def clamp_int(value, low: int, high: int) -> int:
    """
    Clamp a number into [low, high] as an int.

    NaN falls back to ``low``; infinities go to the nearer bound.
    """
    number = float(value)
    if math.isnan(number):
        return low
    if math.isinf(number):
        return high if number > 0 else low
    return clamp(int(number), low, high)


# ============================================================================
# Session Configuration
# ============================================================================

@dataclass
class SessionConfig:
    """
    Configuration for a layered session.

    Attributes:
        width: Columns per layer.
        height: Rows per layer.
        depth: Number of layers at the start of a game.
        mine_density: Fraction of each layer's cells holding a mine.
    """

    width: int = 8
    height: int = 8
    depth: int = 3
    mine_density: float = 0.15

    def __post_init__(self) -> None:
        """Clamp every field into its allowed range."""
        self.width = clamp_int(self.width, MIN_SIZE, MAX_SIZE)
        self.height = clamp_int(self.height, MIN_SIZE, MAX_SIZE)
        self.depth = clamp_int(self.depth, MIN_DEPTH, MAX_DEPTH)
        density = float(self.mine_density)
        if math.isnan(density):
            density = MIN_DENSITY
        self.mine_density = clamp(density, MIN_DENSITY, MAX_DENSITY)

    @property
    def mine_count(self) -> int:
        """Mines per layer, rounded half up and kept within the board."""
        cells = self.width * self.height
        raw = math.floor(cells * self.mine_density + 0.5)
        return clamp(raw, 1, cells - 1)

    def board_config(self) -> BoardConfig:
        return BoardConfig(self.width, self.height, self.mine_count)


# Preset difficulty levels
EASY = SessionConfig(8, 8, 2, 0.12)
MEDIUM = SessionConfig(10, 10, 3, 0.15)
HARD = SessionConfig(16, 16, 4, 0.2)

PRESETS = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}
