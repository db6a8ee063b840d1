#!/usr/bin/env python3
"""
Layered Minesweeper - terminal entry point.

Usage:
    python main.py [--preset {easy,medium,hard}]
    python main.py [--width W] [--height H] [--depth D] [--density P] [--seed S]
"""
import argparse
import logging

from minestack import PRESETS, Session, SessionConfig
from minestack.play import run


def build_config(args: argparse.Namespace) -> SessionConfig:
    """Merge preset and explicit options into a session config."""
    base = PRESETS[args.preset] if args.preset else SessionConfig()
    return SessionConfig(
        width=args.width if args.width is not None else base.width,
        height=args.height if args.height is not None else base.height,
        depth=args.depth if args.depth is not None else base.depth,
        mine_density=(
            args.density if args.density is not None else base.mine_density
        ),
    )


def main() -> None:
    """Parse arguments and start an interactive game."""
    parser = argparse.ArgumentParser(
        description="Layered Minesweeper - clear every layer without a blast"
    )
    parser.add_argument("--preset", choices=sorted(PRESETS), default=None)
    parser.add_argument("--width", type=int, default=None, help="Columns per layer")
    parser.add_argument("--height", type=int, default=None, help="Rows per layer")
    parser.add_argument("--depth", type=int, default=None, help="Number of layers")
    parser.add_argument(
        "--density", type=float, default=None, help="Fraction of cells with mines"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)
    session = Session(config, rng=args.seed)
    session.new_game()

    print(
        f"{config.depth} layers of {config.width}x{config.height}, "
        f"{config.mine_count} mines each"
    )
    outcome = run(session)
    print(f"Final status: {outcome.name}")


if __name__ == "__main__":
    main()
