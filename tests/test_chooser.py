from __future__ import annotations

import logging
import random

import pytest

from falltris.chooser import PieceChooser
from falltris.tetromino import Tetromino


def test_queue_starts_full_and_stays_full() -> None:
    chooser = PieceChooser(3, seed=0)
    assert len(chooser.queue) == 3
    for _ in range(50):
        shape = chooser.next()
        assert shape in Tetromino.playable()
        assert len(chooser.queue) == 3


def test_next_deals_the_oldest_queued_shape() -> None:
    chooser = PieceChooser(3, seed=5)
    expected = list(chooser.upcoming)
    dealt = [chooser.next() for _ in range(3)]
    assert dealt == expected


def test_new_shapes_enter_at_the_back_of_the_deal_order() -> None:
    chooser = PieceChooser(2, seed=9)
    first, second = chooser.upcoming
    chooser.next()
    assert chooser.upcoming[0] == second


def test_same_seed_deals_same_sequence() -> None:
    a = PieceChooser(3, seed=42)
    b = PieceChooser(3, seed=42)
    assert [a.next() for _ in range(30)] == [b.next() for _ in range(30)]


def test_injected_rng_is_used() -> None:
    rng = random.Random(7)
    chooser = PieceChooser(1, rng=rng)
    twin = random.Random(7)
    playable = Tetromino.playable()
    assert chooser.queue == [twin.choice(playable)]


def test_every_shape_eventually_appears() -> None:
    chooser = PieceChooser(3, seed=1)
    seen = {chooser.next() for _ in range(500)}
    assert seen == set(Tetromino.playable())


def test_short_queue_is_refilled_without_being_consumed(caplog) -> None:
    chooser = PieceChooser(3, seed=3)
    chooser.queue.pop()
    remaining = list(chooser.queue)

    with caplog.at_level(logging.WARNING, logger="falltris.chooser"):
        shape = chooser.next()

    assert shape in Tetromino.playable()
    assert len(chooser.queue) == 3
    assert chooser.queue[1:] == remaining
    assert "Lookahead queue" in caplog.text


def test_rejects_non_positive_length() -> None:
    with pytest.raises(ValueError):
        PieceChooser(0)
