"""Board representation for the playfield.

The board owns the grid, the score and the lock timer.  The active piece is
always present in the grid while it is in play: every operation that needs
to look "underneath" the piece removes it first and puts it back before
returning.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece, Tetromino

logger = logging.getLogger(__name__)

Grid = NDArray[np.uint8]
Clock = Callable[[], float]

EMPTY = np.uint8(Tetromino.E)


class Move(Enum):
    """Move intents understood by :meth:`Board.move_piece`."""

    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"  # soft drop, one row
    ROTATE = "rotate"
    DROP = "drop"  # hard drop


def create_empty_grid(height: int, width: int) -> Grid:
    """Return a new grid filled with ``Tetromino.E``."""

    return np.full((height, width), EMPTY, dtype=np.uint8)


class Board:
    """Grid of cells plus the scoring and locking state of one game."""

    def __init__(self, config: Optional[GameConfig] = None, *, clock: Optional[Clock] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.width = self.config.width
        self.height = self.config.height
        self._clock = clock or time.monotonic
        self.grid: Grid = create_empty_grid(self.height, self.width)
        self.score = 0
        self.just_dropped = False
        self._lock_started: Optional[float] = None

    def reset(self) -> None:
        """Empty the grid and forget score, drop flag and lock timer."""

        self.grid = create_empty_grid(self.height, self.width)
        self.score = 0
        self.just_dropped = False
        self._lock_started = None

    def copy(self) -> "Board":
        """Return an independent board with the same contents."""

        other = Board(self.config, clock=self._clock)
        other.grid = self.grid.copy()
        other.score = self.score
        other.just_dropped = self.just_dropped
        other._lock_started = self._lock_started
        return other

    @property
    def lock_timer_running(self) -> bool:
        return self._lock_started is not None

    def get_cell(self, x: int, y: int) -> Tetromino:
        """Return the tetromino stored at column ``x`` and row ``y``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            return Tetromino(int(self.grid[y, x]))
        raise IndexError("Cell out of bounds")

    def count(self, tetromino: Tetromino) -> int:
        """Return how many grid cells hold ``tetromino``."""

        return int(np.count_nonzero(self.grid == np.uint8(tetromino)))

    # Grid writes ------------------------------------------------------
    def _write(self, piece: Piece, value: np.uint8) -> None:
        for x, y in piece.occupied_cells():
            # Cells above the top edge are not part of the grid.
            if y >= 0:
                self.grid[y, x] = value

    def place(self, piece: Piece) -> None:
        """Write ``piece`` into the grid with its tetromino value."""

        self._write(piece, np.uint8(piece.tetromino))

    def remove(self, piece: Piece) -> None:
        """Clear the cells covered by ``piece``."""

        self._write(piece, EMPTY)

    # Queries ----------------------------------------------------------
    def is_out_of_bounds(self, piece: Piece) -> bool:
        """Return ``True`` if any cell is left, right or below the board.

        Cells above row 0 are allowed.
        """

        for x, y in piece.occupied_cells():
            if x < 0 or x >= self.width or y >= self.height:
                return True
        return False

    def is_colliding(self, piece: Piece) -> bool:
        """Return ``True`` if ``piece`` overlaps anything already in the grid.

        The live piece must have been removed first, otherwise it collides
        with itself.  Cells off the grid are ignored here; see
        :meth:`is_out_of_bounds`.
        """

        for x, y in piece.occupied_cells():
            if 0 <= x < self.width and 0 <= y < self.height and self.grid[y, x] != EMPTY:
                return True
        return False

    def will_collide(self, piece: Piece) -> bool:
        """Return ``True`` if a freshly spawned ``piece`` cannot be placed."""

        return self.is_out_of_bounds(piece) or self.is_colliding(piece)

    def _fits(self, piece: Piece) -> bool:
        return not self.is_out_of_bounds(piece) and not self.is_colliding(piece)

    # Moves ------------------------------------------------------------
    def adjust_rotation(self, piece: Piece) -> Piece:
        """Shift a freshly rotated piece back inside the side walls.

        A single horizontal shift by the largest overshoot on either side.
        """

        offset = 0
        for x, _ in piece.occupied_cells():
            if x < 0 and -x > offset:
                offset = -x
            elif x >= self.width and (self.width - 1) - x < offset:
                offset = (self.width - 1) - x
        return piece.translated(offset, 0) if offset else piece

    def _descend(self, piece: Piece) -> Tuple[Piece, int]:
        """Return the lowest reachable position below ``piece`` and the rows fallen.

        Expects ``piece`` to be absent from the grid.
        """

        rows = 0
        below = piece.translated(0, 1)
        while self._fits(below):
            piece = below
            below = piece.translated(0, 1)
            rows += 1
        return piece, rows

    def _apply(self, piece: Piece, move: Move) -> Piece:
        if move is Move.LEFT:
            return piece.translated(-1, 0)
        if move is Move.RIGHT:
            return piece.translated(1, 0)
        if move is Move.DOWN:
            return piece.translated(0, 1)
        if move is Move.ROTATE:
            return self.adjust_rotation(piece.rotated())
        if move is Move.DROP:
            return self._descend(piece)[0]
        raise ValueError(f"Unknown move: {move!r}")

    def can_move(self, piece: Piece, move: Move) -> bool:
        """Return ``True`` if ``move`` is legal for the live ``piece``.

        The grid is left exactly as it was, whatever the verdict.
        """

        self.remove(piece)
        try:
            return self._fits(self._apply(piece, move))
        finally:
            self.place(piece)

    def move_piece(self, piece: Piece, move: Move) -> Piece:
        """Apply ``move`` to the live ``piece`` and return the result.

        Illegal moves are rejected by returning ``piece`` unchanged.  Soft
        drops score one point, hard drops one point per row fallen.
        """

        if not self.can_move(piece, move):
            return piece

        self.remove(piece)
        if move is Move.DROP:
            moved, rows = self._descend(piece)
            self.score += rows
            self.just_dropped = True
            self._lock_started = None
        else:
            moved = self._apply(piece, move)
            if move is Move.DOWN:
                self.score += 1
        self.place(moved)
        return moved

    # Locking and clearing ---------------------------------------------
    def _is_grounded(self, piece: Piece) -> bool:
        for x, y in piece.occupied_cells():
            if y == self.height - 1:
                return True
            if y + 1 >= 0 and self.grid[y + 1, x] != EMPTY:
                return True
        return False

    def is_placed(self, piece: Piece) -> bool:
        """Advance the lock-delay timer and report whether ``piece`` locks.

        A grounded piece starts the timer on first sight and locks once the
        configured delay has elapsed.  A piece that is no longer grounded
        resets the timer.
        """

        self.remove(piece)
        try:
            grounded = self._is_grounded(piece)
        finally:
            self.place(piece)

        if not grounded:
            self._lock_started = None
            return False

        now = self._clock()
        if self._lock_started is None:
            self._lock_started = now
            return False
        if now - self._lock_started >= self.config.lock_delay:
            self._lock_started = None
            return True
        return False

    def clear_lines(self) -> int:
        """Clear completed rows, award the bonus and return how many cleared."""

        cleared = 0
        row = self.height - 1
        while row >= 0:
            if np.all(self.grid[row] != EMPTY):
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = EMPTY
                cleared += 1
            else:
                row -= 1

        bonus = self.config.bonus_for(cleared)
        self.score += bonus
        if cleared:
            logger.debug("Cleared %d row(s), bonus %d, score %d", cleared, bonus, self.score)
        return cleared
