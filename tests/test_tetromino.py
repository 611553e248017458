from __future__ import annotations

import pytest

from falltris.tetromino import (
    COLORS,
    SHAPE_TABLE,
    Orientation,
    Piece,
    Tetromino,
    shape_cells,
)


def test_shape_table_covers_every_pair() -> None:
    assert len(SHAPE_TABLE) == len(Tetromino) * len(Orientation)


@pytest.mark.parametrize("shape", Tetromino.playable())
@pytest.mark.parametrize("orientation", list(Orientation))
def test_occupied_cells_are_four_distinct_offsets(shape: Tetromino, orientation: Orientation) -> None:
    piece = Piece(shape, position=(2, 5), orientation=orientation)
    cells = piece.occupied_cells()
    assert len(cells) == 4
    assert len(set(cells)) == 4
    expected = [(dx + 2, dy + 5) for dx, dy in shape_cells(shape, orientation)]
    assert cells == expected


def test_empty_marker_has_degenerate_cells() -> None:
    assert Piece(Tetromino.E).occupied_cells() == [(0, 0)] * 4


def test_spawn_cells_sit_in_top_centre_columns() -> None:
    cells = Piece(Tetromino.I).occupied_cells()
    assert cells == [(3, 0), (4, 0), (5, 0), (6, 0)]


def test_orientation_cycles_clockwise() -> None:
    assert Orientation.UP.next() is Orientation.RIGHT
    assert Orientation.RIGHT.next() is Orientation.DOWN
    assert Orientation.DOWN.next() is Orientation.LEFT
    assert Orientation.LEFT.next() is Orientation.UP


def test_rotated_and_translated_return_new_pieces() -> None:
    piece = Piece(Tetromino.T)
    turned = piece.rotated()
    moved = piece.translated(-2, 3)

    assert piece == Piece(Tetromino.T, (0, 0), Orientation.UP)
    assert turned.orientation is Orientation.RIGHT
    assert turned.position == (0, 0)
    assert moved.position == (-2, 3)
    assert moved.orientation is Orientation.UP


def test_four_rotations_return_to_start() -> None:
    piece = Piece(Tetromino.L, position=(1, 1))
    assert piece.rotated().rotated().rotated().rotated() == piece


def test_lookup_outside_table_is_an_assertion() -> None:
    with pytest.raises(AssertionError):
        shape_cells("I", 0)  # type: ignore[arg-type]


def test_playable_shapes_exclude_empty_and_have_colors() -> None:
    playable = Tetromino.playable()
    assert Tetromino.E not in playable
    assert len(playable) == 7
    assert Tetromino.E.color == (0, 0, 0)
    assert Tetromino.I.color == (0x00, 0xF0, 0xF0)
    assert len({COLORS[t] for t in playable}) == 7
