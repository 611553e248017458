"""Tetromino shapes, orientations and the falling piece value type.

Cells are ``(x, y)`` tuples where ``x`` is the column and ``y`` the row, with
row ``0`` at the top of the board.  The shape table below already includes
the spawn offset: a piece at position ``(0, 0)`` occupies columns 3..6 of the
top rows, roughly centred on a ten column board.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

Cell = Tuple[int, int]
Color = Tuple[int, int, int]


class Tetromino(IntEnum):
    """The seven standard shapes plus ``E``, the empty-cell marker.

    The integer value is what the board grid stores, so ``E`` must stay ``0``.
    """

    E = 0
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7

    @classmethod
    def playable(cls) -> Tuple["Tetromino", ...]:
        """Return every shape that can be dealt (all but ``E``)."""

        return tuple(t for t in cls if t is not cls.E)

    @property
    def color(self) -> Color:
        return COLORS[self]


class Orientation(IntEnum):
    """Rotation state of a piece, clockwise from the spawn orientation."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def next(self) -> "Orientation":
        return Orientation((self + 1) % len(Orientation))


def _hex(value: int) -> Color:
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


COLORS: Dict[Tetromino, Color] = {
    Tetromino.E: _hex(0x000000),
    Tetromino.I: _hex(0x00F0F0),
    Tetromino.O: _hex(0xF0F000),
    Tetromino.T: _hex(0xA000F0),
    Tetromino.S: _hex(0x00F000),
    Tetromino.Z: _hex(0xF00000),
    Tetromino.J: _hex(0x0000F0),
    Tetromino.L: _hex(0xF0A000),
}


# Offsets per shape, listed in ``Orientation`` order.  Shapes with fewer
# distinct states repeat them so every (shape, orientation) pair is present.
_I_FLAT = ((3, 0), (4, 0), (5, 0), (6, 0))
_I_TALL = ((5, 0), (5, 1), (5, 2), (5, 3))
_O = ((4, 0), (5, 0), (4, 1), (5, 1))
_S_FLAT = ((4, 0), (5, 0), (3, 1), (4, 1))
_S_TALL = ((4, 0), (4, 1), (5, 1), (5, 2))
_Z_FLAT = ((3, 0), (4, 0), (4, 1), (5, 1))
_Z_TALL = ((5, 0), (4, 1), (5, 1), (4, 2))

_SHAPE_STATES: Dict[Tetromino, Tuple[Tuple[Cell, ...], ...]] = {
    Tetromino.E: (((0, 0),) * 4,) * 4,
    Tetromino.I: (_I_FLAT, _I_TALL, _I_FLAT, _I_TALL),
    Tetromino.O: (_O, _O, _O, _O),
    Tetromino.T: (
        ((4, 0), (3, 1), (4, 1), (5, 1)),
        ((4, 0), (5, 1), (4, 1), (4, 2)),
        ((4, 1), (3, 0), (4, 0), (5, 0)),
        ((4, 0), (3, 1), (4, 1), (4, 2)),
    ),
    Tetromino.S: (_S_FLAT, _S_TALL, _S_FLAT, _S_TALL),
    Tetromino.Z: (_Z_FLAT, _Z_TALL, _Z_FLAT, _Z_TALL),
    Tetromino.J: (
        ((3, 1), (4, 1), (5, 1), (3, 0)),
        ((4, 0), (4, 1), (4, 2), (5, 0)),
        ((3, 0), (4, 0), (5, 0), (5, 1)),
        ((4, 0), (4, 1), (4, 2), (3, 2)),
    ),
    Tetromino.L: (
        ((3, 1), (4, 1), (5, 1), (5, 0)),
        ((4, 0), (4, 1), (4, 2), (5, 2)),
        ((3, 0), (4, 0), (5, 0), (3, 1)),
        ((3, 0), (4, 0), (4, 1), (4, 2)),
    ),
}


SHAPE_TABLE: Dict[Tuple[Tetromino, Orientation], Tuple[Cell, ...]] = {
    (shape, orientation): states[orientation]
    for shape, states in _SHAPE_STATES.items()
    for orientation in Orientation
}


def shape_cells(shape: Tetromino, orientation: Orientation) -> Tuple[Cell, ...]:
    """Return the cell offsets for ``shape`` at ``orientation``.

    The table covers every pair, so a miss means the caller passed something
    that is not a ``Tetromino``/``Orientation`` at all.
    """

    cells = SHAPE_TABLE.get((shape, orientation))
    if cells is None:
        raise AssertionError(f"no shape entry for {shape!r} at {orientation!r}")
    return cells


@dataclass(frozen=True)
class Piece:
    """A tetromino at a position and orientation.

    Pieces are immutable; moving one produces a new piece.  The board decides
    whether a moved piece is legal and keeps the grid in sync with it.
    """

    tetromino: Tetromino
    position: Cell = (0, 0)  # (x, y)
    orientation: Orientation = Orientation.UP

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    def occupied_cells(self) -> List[Cell]:
        """Return the four absolute cells covered by this piece."""

        x, y = self.position
        return [(x + dx, y + dy) for dx, dy in shape_cells(self.tetromino, self.orientation)]

    def rotated(self) -> "Piece":
        """Return this piece turned one step clockwise, without any kick."""

        return replace(self, orientation=self.orientation.next())

    def translated(self, dx: int, dy: int) -> "Piece":
        """Return this piece shifted by ``dx`` columns and ``dy`` rows."""

        x, y = self.position
        return replace(self, position=(x + dx, y + dy))
