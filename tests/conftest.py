"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minestack import Cell, Layer, Session, SessionConfig


# ============================================================================
# Layer Fixtures
# ============================================================================

@pytest.fixture
def single_mine_layer() -> Layer:
    """3x3 layer with one mine in the bottom-right corner."""
    return Layer.from_mines(3, 3, [(2, 2)])


@pytest.fixture
def two_mine_layer() -> Layer:
    """2x2 layer with mines on the diagonal."""
    return Layer.from_mines(2, 2, [(0, 0), (1, 1)])


@pytest.fixture
def corner_mine_layer() -> Layer:
    """2x2 layer with a single mine at (1, 1)."""
    return Layer.from_mines(2, 2, [(1, 1)])


@pytest.fixture
def wall_layer() -> Layer:
    """5x5 layer with a column of mines at x=2 splitting the board."""
    return Layer.from_mines(5, 5, [(2, y) for y in range(5)])


@pytest.fixture
def open_layer() -> Layer:
    """5x5 layer with one mine at (4, 4) and a large zero region."""
    return Layer.from_mines(5, 5, [(4, 4)])


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def two_layer_session() -> Session:
    """Two 2x2 layers: mine at (0, 0) on top, (1, 1) below."""
    top = Layer.from_mines(2, 2, [(0, 0)], layer_id=0)
    bottom = Layer.from_mines(2, 2, [(1, 1)], layer_id=1)
    return Session.from_layers([top, bottom])


@pytest.fixture
def seeded_session() -> Session:
    """A dealt 9x9 session with three layers and a fixed seed."""
    session = Session(SessionConfig(9, 9, 3, 0.15), rng=1234)
    session.new_game()
    return session


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)
