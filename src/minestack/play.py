"""
Terminal front end for a layered session.

Commands:
    r LAYER X Y   reveal a cell
    f LAYER X Y   toggle a flag
    n             deal a new game
    q             quit
"""
from dataclasses import dataclass
from typing import Callable, Optional

from .layer import GameState
from .render import render_session
from .session import Session

HELP = "Commands: r LAYER X Y | f LAYER X Y | n (new game) | q (quit)"


@dataclass
class Command:
    """A parsed player command."""

    action: str
    layer: int = 0
    x: int = 0
    y: int = 0


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one input line.

    Returns:
        The command, or None if the line is not understood.
    """
    parts = line.strip().lower().split()
    if not parts:
        return None
    action = parts[0]
    if action in ("n", "q") and len(parts) == 1:
        return Command(action)
    if action in ("r", "f") and len(parts) == 4:
        try:
            layer, x, y = (int(part) for part in parts[1:])
        except ValueError:
            return None
        return Command(action, layer, x, y)
    return None


def apply_command(session: Session, command: Command) -> bool:
    """Run a reveal, flag or new-game command against ``session``."""
    if command.action == "r":
        return session.reveal(command.layer, command.x, command.y)
    if command.action == "f":
        return session.toggle_flag(command.layer, command.x, command.y)
    if command.action == "n":
        session.new_game()
        return True
    return False


def run(
    session: Session,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> GameState:
    """
    Play until the player quits or input ends.

    Returns:
        The session outcome when the loop stopped.
    """
    write(HELP)
    write(render_session(session))

    while True:
        try:
            line = read("> ")
        except EOFError:
            break

        command = parse_command(line)
        if command is None:
            write(f"Unrecognised command: {line.strip()!r}")
            write(HELP)
            continue
        if command.action == "q":
            break

        if not apply_command(session, command):
            write("Nothing happened.")
        write(render_session(session))

        if session.overall_status == GameState.WON:
            write("*** All layers cleared! ***")
        elif session.overall_status == GameState.LOST:
            write("*** A mine went off. Type n for a new game. ***")

    return session.overall_status
