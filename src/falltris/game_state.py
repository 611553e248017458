"""High level game state machine."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .board import Board, Clock, Grid, Move
from .chooser import PieceChooser
from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece, Tetromino

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Which screen is active and which subsystem receives input."""

    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class GameOverReason(Enum):
    TOP_OUT = "top_out"  # a new piece overlapped the stack
    OUT_OF_PIECES = "out_of_pieces"  # the session's piece budget ran out


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game for renderers."""

    grid: Grid
    score: int
    next_pieces: Tuple[Tetromino, ...]
    state: GameState
    pieces_remaining: int
    lines: int
    reason: Optional[GameOverReason] = None


class Game:
    """One player's session: menu, play and game over.

    Each call to :meth:`tick` is one frame.  Within a frame the active piece
    is first checked for locking (clearing rows and spawning the next piece),
    then the manual moves are applied, then gravity.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._clock = clock or time.monotonic
        self._rng = rng or random.Random(self.config.seed)
        self.board = Board(self.config, clock=self._clock)
        self.chooser = PieceChooser(self.config.lookahead, rng=self._rng)
        self.state = GameState.MENU
        self.reason: Optional[GameOverReason] = None
        self.active: Optional[Piece] = None
        self.pieces_remaining = self.config.piece_limit
        self.lines = 0
        self._last_gravity = self._clock()

    @property
    def score(self) -> int:
        return self.board.score

    def start(self) -> None:
        """Begin a new session from the menu or the game-over screen."""

        if self.state is GameState.PLAYING:
            return
        self.board.reset()
        self.chooser = PieceChooser(self.config.lookahead, rng=self._rng)
        self.pieces_remaining = self.config.piece_limit
        self.lines = 0
        self.reason = None
        self.active = None
        self.state = GameState.PLAYING
        self._last_gravity = self._clock()
        logger.info("Game started")
        self._spawn()

    restart = start

    def _end(self, reason: GameOverReason) -> None:
        self.state = GameState.GAME_OVER
        self.reason = reason
        self.active = None
        logger.info("Game over (%s). Score: %d", reason.value, self.score)

    def _spawn(self) -> None:
        if self.pieces_remaining <= 0:
            self._end(GameOverReason.OUT_OF_PIECES)
            return

        piece = Piece(self.chooser.next())
        self.pieces_remaining -= 1
        self.board.just_dropped = False
        if self.board.will_collide(piece):
            self._end(GameOverReason.TOP_OUT)
            return
        self.board.place(piece)
        self.active = piece

    def _settle(self) -> None:
        """Lock the active piece if its time is up and bring in the next one."""

        assert self.active is not None
        if self.board.just_dropped or self.board.is_placed(self.active):
            cleared = self.board.clear_lines()
            self.lines += cleared
            self.active = None
            self._spawn()

    def tick(self, moves: Iterable[Move] = ()) -> None:
        """Advance the game by one frame, applying ``moves`` in order."""

        if self.state is not GameState.PLAYING:
            return

        self._settle()
        if self.state is not GameState.PLAYING:
            return

        assert self.active is not None
        for move in moves:
            if self.board.just_dropped:
                # The piece is committed; it locks on the next frame.
                break
            self.active = self.board.move_piece(self.active, move)

        now = self._clock()
        if now - self._last_gravity > self.config.gravity_interval:
            self.active = self.board.move_piece(self.active, Move.DOWN)
            self._last_gravity = now

    def snapshot(self) -> GameSnapshot:
        """Return a read-only copy of everything a renderer needs."""

        grid = self.board.grid.copy()
        grid.setflags(write=False)
        return GameSnapshot(
            grid=grid,
            score=self.score,
            next_pieces=self.chooser.upcoming,
            state=self.state,
            pieces_remaining=self.pieces_remaining,
            lines=self.lines,
            reason=self.reason,
        )

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

