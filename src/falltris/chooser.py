"""Lookahead queue of upcoming shapes."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .tetromino import Tetromino

logger = logging.getLogger(__name__)


class PieceChooser:
    """Deal shapes from a uniform distribution through a fixed-length queue.

    New shapes enter at the front of ``queue`` and are dealt from the back, so
    every shape is visible for ``length`` deals before it becomes active.
    Draws are independent; there is no bag and no repeat protection.
    """

    def __init__(
        self,
        length: int = 3,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if length < 1:
            raise ValueError(f"length must be positive, got {length}")
        self.length = length
        self._rng = rng or random.Random(seed)
        self.queue: List[Tetromino] = [self._random_shape() for _ in range(length)]

    def _random_shape(self) -> Tetromino:
        return self._rng.choice(Tetromino.playable())

    @property
    def upcoming(self) -> Tuple[Tetromino, ...]:
        """Queued shapes in the order they will be dealt."""

        return tuple(reversed(self.queue))

    def next(self) -> Tetromino:
        """Deal the oldest queued shape and queue a fresh one."""

        if len(self.queue) != self.length:
            # Not expected to happen: the queue is always refilled below.
            logger.warning(
                "Lookahead queue has %d entries, expected %d; dealing a fresh shape",
                len(self.queue),
                self.length,
            )
            del self.queue[self.length :]
            while len(self.queue) < self.length:
                self.queue.insert(0, self._random_shape())
            return self._random_shape()

        shape = self.queue.pop()
        self.queue.insert(0, self._random_shape())
        return shape
