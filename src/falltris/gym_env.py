"""Gymnasium-compatible wrapper around :class:`~falltris.game_state.Game`.

Each step is one frame of the game loop:

  - action ``0..4`` is a :class:`~falltris.board.Move` (in enum order),
    action ``5`` does nothing and lets gravity act;
  - time advances by ``1 / fps`` seconds through a :class:`TickClock`, so lock
    delay and gravity follow the frame count rather than wall time;
  - reward is the change in score over the frame;
  - the episode terminates when the game ends (top out or piece budget).

Observation is the grid (height x width, ``uint8`` tetromino values).
"""

from __future__ import annotations

import random
from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Move
from .config import DEFAULT_CONFIG, GameConfig
from .game_state import Game, GameState
from .tetromino import Tetromino
from .utils import TickClock, format_grid

MOVES = tuple(Move)
NOOP_ACTION = len(MOVES)


class FalltrisEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.config = config or DEFAULT_CONFIG
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(len(MOVES) + 1)
        self.observation_space = spaces.Box(
            low=0,
            high=int(max(Tetromino)),
            shape=(self.config.height, self.config.width),
            dtype=np.uint8,
        )
        self._clock = TickClock(step=1 / self.metadata["render_fps"])
        self._game: Optional[Game] = None
        self._steps = 0
        self._max_steps = max_steps

    @property
    def game(self) -> Game:
        if self._game is None:
            raise RuntimeError("Call reset() before using the environment")
        return self._game

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        piece_seed = int(self.np_random.integers(0, 2**31 - 1))
        self._clock = TickClock(step=1 / self.metadata["render_fps"])
        self._game = Game(self.config, clock=self._clock, rng=random.Random(piece_seed))
        self._game.start()
        self._steps = 0
        return self._observation(), self._info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        game = self.game
        before = game.score
        moves = () if action == NOOP_ACTION else (MOVES[action],)
        self._clock.advance()
        game.tick(moves)
        self._steps += 1

        reward = float(game.score - before)
        terminated = game.state is GameState.GAME_OVER
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return self._observation(), reward, terminated, truncated, self._info()

    def render(self):
        if self.render_mode == "ansi":
            return format_grid(self.game.board.grid)
        return None

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _observation(self) -> np.ndarray:
        return self.game.board.grid.copy()

    def _info(self) -> Dict:
        game = self.game
        return {
            "score": game.score,
            "lines": game.lines,
            "pieces_remaining": game.pieces_remaining,
            "reason": game.reason.value if game.reason else None,
        }
