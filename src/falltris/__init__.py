"""Falling-block puzzle engine: board, pieces, lock delay and scoring."""

from .board import Board, Move
from .chooser import PieceChooser
from .config import DEFAULT_CONFIG, GameConfig
from .game_state import Game, GameOverReason, GameSnapshot, GameState
from .player import Autopilot, Player, RandomPlayer
from .tetromino import Orientation, Piece, Tetromino, shape_cells
from .utils import TickClock, format_grid

__all__ = [
    "Autopilot",
    "Board",
    "DEFAULT_CONFIG",
    "Game",
    "GameConfig",
    "GameOverReason",
    "GameSnapshot",
    "GameState",
    "Move",
    "Orientation",
    "Piece",
    "PieceChooser",
    "Player",
    "RandomPlayer",
    "Tetromino",
    "TickClock",
    "format_grid",
    "shape_cells",
]
