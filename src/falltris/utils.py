"""Utility helpers for the falltris engine."""

from __future__ import annotations

from .board import Grid
from .tetromino import Tetromino


def format_grid(grid: Grid, *, filled: str = "X", empty: str = ".") -> str:
    """Return a text picture of ``grid``, one line per row."""

    return "\n".join(
        "".join(empty if cell == Tetromino.E else filled for cell in row) for row in grid
    )


class TickClock:
    """Clock that only moves when told to.

    Used in place of ``time.monotonic`` when timing must follow frame count
    rather than wall time: headless play, the gym environment and tests.
    """

    def __init__(self, step: float = 1 / 60, start: float = 0.0) -> None:
        self.step = step
        self.current = start

    def advance(self, delta: float | None = None) -> float:
        self.current += self.step if delta is None else delta
        return self.current

    def __call__(self) -> float:
        return self.current
