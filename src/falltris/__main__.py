"""Command line entry point.

Run with: ``python -m falltris``

Opens the pygame window by default.  ``--headless`` plays a session with the
random player on a frame-counted clock and prints the final grid, which is a
quick smoke test that needs no display.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import GameConfig
from .game_state import Game
from .player import Autopilot, RandomPlayer
from .utils import TickClock, format_grid

LOGGER = logging.getLogger(__name__)

FPS = 60


def run_headless(config: GameConfig, *, max_ticks: int = 100_000) -> Game:
    """Play one autopiloted session without a window and return the game."""

    clock = TickClock(step=1 / FPS)
    game = Game(config, clock=clock)
    autopilot = Autopilot(RandomPlayer(seed=config.seed))
    game.start()
    ticks = 0
    while not game.game_over and ticks < max_ticks:
        clock.advance()
        move = autopilot.next_move(game.board, game.active)
        game.tick(() if move is None else (move,))
        ticks += 1
    LOGGER.info(
        "Headless session finished after %d ticks: score=%d lines=%d state=%s",
        ticks,
        game.score,
        game.lines,
        game.state.value,
    )
    return game


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="falltris", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--autoplay",
        action="store_true",
        help="Let the random player control the window.",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Play one autopiloted session without a window and print the grid.",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=100_000,
        help="Frame limit for --headless sessions.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    config = GameConfig(seed=args.seed)

    if args.headless:
        game = run_headless(config, max_ticks=args.max_ticks)
        print(format_grid(game.board.grid))
        print(f"Score: {game.score}")
        return

    from .run_pygame import main as run_window

    run_window(config, autoplay=args.autoplay)


if __name__ == "__main__":
    main()
