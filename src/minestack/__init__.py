"""
Layered Minesweeper module.

Provides the game engine: cells, board generation, per-layer gameplay and
the session that stacks layers together.
"""
from .cell import Cell, CellState
from .generator import BoardConfig, build_grid, generate, get_neighbors, place_mines
from .layer import GameState, Layer
from .config import SessionConfig, EASY, MEDIUM, HARD, PRESETS
from .session import Session, SessionEvent, create_session, reveal, toggle_flag

__all__ = [
    "Cell",
    "CellState",
    "BoardConfig",
    "build_grid",
    "generate",
    "get_neighbors",
    "place_mines",
    "GameState",
    "Layer",
    "SessionConfig",
    "EASY",
    "MEDIUM",
    "HARD",
    "PRESETS",
    "Session",
    "SessionEvent",
    "create_session",
    "reveal",
    "toggle_flag",
]
