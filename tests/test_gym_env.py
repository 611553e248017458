from __future__ import annotations

import numpy as np
import pytest

from falltris.board import Move
from falltris.config import GameConfig
from falltris.gym_env import MOVES, NOOP_ACTION, FalltrisEnv


def test_reset_returns_grid_observation() -> None:
    env = FalltrisEnv()
    obs, info = env.reset(seed=0)

    assert obs.shape == (24, 10)
    assert obs.dtype == np.uint8
    assert env.observation_space.contains(obs)
    assert np.count_nonzero(obs) == 4
    assert info["score"] == 0
    assert info["pieces_remaining"] == 399
    assert info["reason"] is None


def test_noop_step_lets_time_pass() -> None:
    env = FalltrisEnv()
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(NOOP_ACTION)

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert np.count_nonzero(obs) == 4


def test_hard_drop_rewards_rows_fallen() -> None:
    env = FalltrisEnv()
    env.reset(seed=0)
    _, reward, _, _, info = env.step(MOVES.index(Move.DROP))

    assert reward >= 20
    assert info["score"] == reward


def test_same_seed_reproduces_episode() -> None:
    first = FalltrisEnv()
    second = FalltrisEnv()
    a, _ = first.reset(seed=123)
    b, _ = second.reset(seed=123)
    assert np.array_equal(a, b)
    for action in [0, 3, 4, 5, 1, 4]:
        a, ra, *_ = first.step(action)
        b, rb, *_ = second.step(action)
        assert np.array_equal(a, b)
        assert ra == rb


def test_episode_terminates_when_budget_is_spent() -> None:
    env = FalltrisEnv(config=GameConfig(piece_limit=3))
    env.reset(seed=1)
    drop = MOVES.index(Move.DROP)
    terminated = False
    info = {}
    for _ in range(20):
        _, _, terminated, _, info = env.step(drop)
        if terminated:
            break
    assert terminated
    assert info["reason"] == "out_of_pieces"


def test_truncates_after_max_steps() -> None:
    env = FalltrisEnv(max_steps=2)
    env.reset(seed=0)
    assert env.step(NOOP_ACTION)[3] is False
    assert env.step(NOOP_ACTION)[3] is True


def test_invalid_action_and_missing_reset() -> None:
    env = FalltrisEnv()
    with pytest.raises(RuntimeError):
        env.step(0)
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(99)


def test_ansi_render() -> None:
    env = FalltrisEnv(render_mode="ansi")
    env.reset(seed=0)
    text = env.render()
    lines = text.splitlines()
    assert len(lines) == 24
    assert sum(line.count("X") for line in lines) == 4
