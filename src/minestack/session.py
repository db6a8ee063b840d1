"""
Session coordinator for layered Minesweeper.

A session owns the stack of active layers, dispatches player actions to
them by position, removes layers once they are cleared, and derives the
overall outcome.
"""
import itertools
import logging
from enum import Enum, auto
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .config import SessionConfig
from .generator import RandomSource, make_rng
from .layer import GameState, Layer

logger = logging.getLogger(__name__)


# ============================================================================
# Events
# ============================================================================

class SessionEvent(Enum):
    """Transitions reported to session listeners."""

    LAYER_LOST = auto()
    LAYER_WON = auto()
    LAYER_CLEARED = auto()
    SESSION_WON = auto()


Listener = Callable[["Session", SessionEvent, Optional[Layer]], None]


# ============================================================================
# Session Class
# ============================================================================

class Session:
    """
    A multi-layer game.

    Layers are addressed by their current position in ``layers``. Clearing
    a layer removes it, which shifts every later layer down by one; callers
    holding indices across a clear should re-resolve them with
    ``index_of(layer_id)``.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        rng: RandomSource = None,
        listeners: Optional[Iterable[Listener]] = None,
    ) -> None:
        """
        Initialize an empty session. Call ``new_game`` to deal the layers.

        Args:
            config: Session configuration (default: 8x8, 3 layers).
            rng: Numpy generator or seed used for every layer's mines.
            listeners: Callbacks invoked on layer and session transitions.
        """
        self.config = config or SessionConfig()
        self._rng = make_rng(rng)
        self._listeners: List[Listener] = list(listeners or [])
        self._layers: List[Layer] = []
        self._ids = itertools.count()
        self._won = False
        self._shape = (self.config.height, self.config.width)

    @classmethod
    def from_layers(
        cls,
        layers: Iterable[Layer],
        config: Optional[SessionConfig] = None,
    ) -> "Session":
        """
        Create a session around prebuilt layers.

        All layers must share one board size. Without ``config`` one is
        derived from the layers; its values are clamped, so the size the
        session reports comes from the layers themselves.

        Raises:
            ValueError: If the layers differ in size from each other or
                from ``config``.
        """
        layers = list(layers)
        shapes = {(layer.height, layer.width) for layer in layers}
        if len(shapes) > 1:
            raise ValueError("All layers must have the same dimensions")
        if config is not None and shapes and shapes != {
            (config.height, config.width)
        }:
            raise ValueError("Layer dimensions do not match the config")

        if config is None and layers:
            first = layers[0]
            config = SessionConfig(
                first.width, first.height, len(layers),
                first.mines / (first.width * first.height),
            )
        session = cls(config)
        session._layers = layers
        if layers:
            session._shape = (layers[0].height, layers[0].width)
        next_id = max((layer.layer_id for layer in session._layers), default=-1)
        session._ids = itertools.count(next_id + 1)
        return session

    def new_game(self) -> None:
        """Replace all layers with ``config.depth`` freshly mined ones."""
        board_config = self.config.board_config()
        self._shape = (board_config.height, board_config.width)
        self._layers = [
            Layer.generate(board_config, next(self._ids), self._rng)
            for _ in range(self.config.depth)
        ]
        self._won = False
        logger.info(
            "New game: %d layers of %dx%d with %d mines each",
            self.config.depth, board_config.width, board_config.height,
            board_config.num_mines,
        )

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self, event: SessionEvent, layer: Optional[Layer]) -> None:
        for listener in self._listeners:
            listener(self, event, layer)

    # ========================================================================
    # Layer Addressing
    # ========================================================================

    @property
    def layers(self) -> Tuple[Layer, ...]:
        """Surviving layers in addressing order."""
        return tuple(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def get_layer(self, index: int) -> Optional[Layer]:
        """Get the layer at ``index``, or None if there is none."""
        if not 0 <= index < len(self._layers):
            return None
        return self._layers[index]

    def index_of(self, layer_id: int) -> Optional[int]:
        """Find the current position of the layer with ``layer_id``."""
        for index, layer in enumerate(self._layers):
            if layer.layer_id == layer_id:
                return index
        return None

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, index: int, x: int, y: int) -> bool:
        """
        Reveal (x, y) on the layer at ``index``.

        Returns:
            True if the request changed anything.
        """
        layer = self.get_layer(index)
        if layer is None or not layer.reveal(x, y):
            return False

        if layer.is_lost:
            self._handle_loss(layer)
        elif layer.is_won:
            self._notify(SessionEvent.LAYER_WON, layer)
            self.check_layer_cleared(index)
        return True

    def toggle_flag(self, index: int, x: int, y: int) -> bool:
        """
        Toggle the flag at (x, y) on the layer at ``index``.

        Returns:
            True if the flag changed.
        """
        layer = self.get_layer(index)
        if layer is None or not layer.toggle_flag(x, y):
            return False
        self.check_layer_cleared(index)
        return True

    def check_layer_cleared(self, index: int) -> bool:
        """
        Remove the layer at ``index`` if its flags match its mines exactly.

        Returns:
            True if the layer was removed.
        """
        layer = self.get_layer(index)
        if layer is None or layer.is_lost:
            return False
        if layer.flags_used != layer.mines:
            return False
        if not layer.is_flag_complete():
            return False

        layer.mark_cleared()
        del self._layers[index]
        logger.info(
            "Layer %d cleared, %d remaining", layer.layer_id, len(self._layers)
        )
        self._notify(SessionEvent.LAYER_CLEARED, layer)

        if not self._layers:
            self._won = True
            logger.info("Session won")
            self._notify(SessionEvent.SESSION_WON, None)
        return True

    def _handle_loss(self, lost: Layer) -> None:
        """
        Re-apply the end-of-game reveal on every lost layer.

        Layers still playing keep their own state.
        """
        self._notify(SessionEvent.LAYER_LOST, lost)
        for layer in self._layers:
            if layer.is_lost:
                layer.reveal_all_mines()

    # ========================================================================
    # Aggregates
    # ========================================================================

    @property
    def is_won(self) -> bool:
        return self._won

    @property
    def overall_status(self) -> GameState:
        """Derive the session outcome from the win flag and layer states."""
        if self._won:
            return GameState.WON
        if any(layer.is_lost for layer in self._layers):
            return GameState.LOST
        return GameState.PLAYING

    @property
    def width(self) -> int:
        """Columns in every layer of this session."""
        return self._shape[1]

    @property
    def height(self) -> int:
        """Rows in every layer of this session."""
        return self._shape[0]

    @property
    def total_mines(self) -> int:
        return sum(layer.mines for layer in self._layers)

    @property
    def total_flags(self) -> int:
        return sum(layer.flags_used for layer in self._layers)

    def get_observation(self) -> np.ndarray:
        """
        Stack every surviving layer's observation.

        Returns:
            int8 array of shape (layers, height, width).
        """
        if not self._layers:
            return np.zeros((0,) + self._shape, dtype=np.int8)
        return np.stack([layer.get_observation() for layer in self._layers])


# ============================================================================
# Module-level API
# ============================================================================

def create_session(
    width: int,
    height: int,
    depth: int,
    mine_density: float,
    rng: RandomSource = None,
) -> Session:
    """
    Create and deal a new session.

    Values outside their bounds are clamped (see ``minestack.config``).
    """
    session = Session(SessionConfig(width, height, depth, mine_density), rng)
    session.new_game()
    return session


def reveal(session: Session, layer_index: int, x: int, y: int) -> bool:
    return session.reveal(layer_index, x, y)


def toggle_flag(session: Session, layer_index: int, x: int, y: int) -> bool:
    return session.toggle_flag(layer_index, x, y)
