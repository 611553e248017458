"""Immutable game configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class GameConfig:
    """Constants shared by the board, the piece chooser and the game loop.

    The defaults describe the standard game.  Alternate values are mostly
    useful for tests that want a small board or a short lock delay.
    """

    width: int = 10
    height: int = 24
    # Seconds a grounded piece may keep moving before it locks.
    lock_delay: float = 0.5
    # Maximum number of pieces dealt in one session.
    piece_limit: int = 400
    # Length of the lookahead queue.
    lookahead: int = 3
    # Seconds between automatic downward moves.
    gravity_interval: float = 1.0
    # Bonus indexed by the number of rows cleared at once.  Counts past the
    # end of the table score nothing.
    line_clear_bonus: Tuple[int, ...] = (0, 25, 100, 400, 1600)
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # The shape table spawns pieces in columns 3..6.
        if self.width < 7:
            raise ValueError(f"width must be at least 7, got {self.width}")
        if self.height < 4:
            raise ValueError(f"height must be at least 4, got {self.height}")
        if self.lock_delay < 0 or self.gravity_interval < 0:
            raise ValueError("delays must not be negative")
        if self.piece_limit < 1:
            raise ValueError(f"piece_limit must be positive, got {self.piece_limit}")
        if self.lookahead < 1:
            raise ValueError(f"lookahead must be positive, got {self.lookahead}")
        if not self.line_clear_bonus:
            raise ValueError("line_clear_bonus must not be empty")

    def bonus_for(self, lines: int) -> int:
        """Return the score bonus for clearing ``lines`` rows in one pass."""

        if 0 <= lines < len(self.line_clear_bonus):
            return self.line_clear_bonus[lines]
        return 0

    def with_overrides(self, **changes) -> "GameConfig":
        """Return a copy with ``changes`` applied (validated again)."""

        return replace(self, **changes)


DEFAULT_CONFIG = GameConfig()
