"""Automated players.

A player looks at the board and the active piece and proposes a sequence of
moves.  :class:`Autopilot` replays that sequence one move per frame and asks
for a new one when it runs out.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, List, Optional, Protocol

from .board import Board, Move
from .tetromino import Piece


class Player(Protocol):
    def choose_moves(self, board: Board, piece: Piece) -> List[Move]:
        """Return the moves to play for ``piece``.

        ``board`` is a copy; changing it has no effect on the game.
        """
        ...


class RandomPlayer:
    """Player that picks moves uniformly at random, legal or not."""

    def __init__(self, moves_per_turn: int = 10, *, seed: Optional[int] = None) -> None:
        self.moves_per_turn = moves_per_turn
        self._rng = random.Random(seed)

    def choose_moves(self, board: Board, piece: Piece) -> List[Move]:
        moves = list(Move)
        return [self._rng.choice(moves) for _ in range(self.moves_per_turn)]


class Autopilot:
    """Feed a :class:`Player`'s moves into the game one frame at a time."""

    def __init__(self, player: Player) -> None:
        self.player = player
        self._pending: Deque[Move] = deque()

    def clear(self) -> None:
        self._pending.clear()

    def next_move(self, board: Board, piece: Optional[Piece]) -> Optional[Move]:
        """Return the move for this frame, or ``None`` without an active piece."""

        if piece is None:
            return None
        if not self._pending:
            self._pending.extend(self.player.choose_moves(board.copy(), piece))
            if not self._pending:
                return None
        return self._pending.popleft()
