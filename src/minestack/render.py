"""
Plain-text rendering of layers and sessions.
"""
from typing import List

from .cell import OBS_FLAGGED, OBS_HIDDEN, OBS_MINE, OBS_MISFLAGGED, OBS_TRIGGERED
from .layer import Layer
from .session import Session

SYMBOLS = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "F",
    OBS_MISFLAGGED: "X",
    OBS_MINE: "*",
    OBS_TRIGGERED: "#",
    0: " ",
}


def render_layer(layer: Layer) -> str:
    """Render one layer as rows of single-character cells."""
    lines = []
    obs = layer.get_observation()

    header = "   " + " ".join(str(x % 10) for x in range(layer.width))
    lines.append(header)
    for y in range(layer.height):
        row_str = f"{y:>2} "
        symbols: List[str] = []
        for x in range(layer.width):
            val = int(obs[y, x])
            symbols.append(SYMBOLS.get(val, str(val)))
        lines.append(row_str + " ".join(symbols))

    return "\n".join(lines)


def render_session(session: Session) -> str:
    """Render every surviving layer with its counters."""
    blocks = [
        f"Status: {session.overall_status.name} | "
        f"Layers: {len(session)} | "
        f"Flags: {session.total_flags}/{session.total_mines}"
    ]
    for index, layer in enumerate(session.layers):
        blocks.append(
            f"[{index}] layer {layer.layer_id} {layer.status.name} "
            f"mines {layer.mines} flags {layer.flags_used}"
        )
        blocks.append(render_layer(layer))
    return "\n\n".join(blocks)
