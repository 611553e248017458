from __future__ import annotations

from typing import List

import numpy as np

from falltris.__main__ import main, run_headless
from falltris.board import Board, Move
from falltris.config import GameConfig
from falltris.game_state import GameOverReason, GameState
from falltris.player import Autopilot, RandomPlayer
from falltris.tetromino import Piece, Tetromino


class ScriptedPlayer:
    def __init__(self, moves: List[Move]) -> None:
        self.moves = moves
        self.calls = 0
        self.boards: List[Board] = []

    def choose_moves(self, board: Board, piece: Piece) -> List[Move]:
        self.calls += 1
        self.boards.append(board)
        board.grid[0, 0] = np.uint8(Tetromino.Z)
        return list(self.moves)


def test_random_player_proposes_ten_moves() -> None:
    player = RandomPlayer(seed=4)
    moves = player.choose_moves(Board(), Piece(Tetromino.T))
    assert len(moves) == 10
    assert all(isinstance(m, Move) for m in moves)
    assert moves == RandomPlayer(seed=4).choose_moves(Board(), Piece(Tetromino.T))


def test_autopilot_replays_one_move_per_call_and_refills() -> None:
    player = ScriptedPlayer([Move.LEFT, Move.RIGHT])
    autopilot = Autopilot(player)
    board = Board()
    piece = Piece(Tetromino.O)

    assert [autopilot.next_move(board, piece) for _ in range(3)] == [
        Move.LEFT,
        Move.RIGHT,
        Move.LEFT,
    ]
    assert player.calls == 2


def test_autopilot_hands_out_board_copies() -> None:
    player = ScriptedPlayer([Move.DOWN])
    autopilot = Autopilot(player)
    board = Board()

    autopilot.next_move(board, Piece(Tetromino.O))

    assert player.boards[0] is not board
    assert board.get_cell(0, 0) is Tetromino.E


def test_autopilot_without_piece_or_moves_returns_none() -> None:
    assert Autopilot(ScriptedPlayer([Move.DOWN])).next_move(Board(), None) is None
    assert Autopilot(ScriptedPlayer([])).next_move(Board(), Piece(Tetromino.I)) is None


def test_autopilot_clear_drops_pending_moves() -> None:
    player = ScriptedPlayer([Move.LEFT, Move.RIGHT])
    autopilot = Autopilot(player)
    autopilot.next_move(Board(), Piece(Tetromino.O))
    autopilot.clear()
    assert autopilot.next_move(Board(), Piece(Tetromino.O)) is Move.LEFT
    assert player.calls == 2


def test_headless_session_runs_out_of_pieces() -> None:
    game = run_headless(GameConfig(seed=1, piece_limit=5))
    assert game.state is GameState.GAME_OVER
    assert game.reason is GameOverReason.OUT_OF_PIECES
    assert game.pieces_remaining == 0


def test_headless_session_respects_tick_limit() -> None:
    game = run_headless(GameConfig(seed=2), max_ticks=3)
    assert game.state is GameState.PLAYING


def test_cli_headless_prints_grid_and_score(capsys) -> None:
    main(["--headless", "--seed", "3", "--max-ticks", "2000", "--log-level", "WARNING"])
    out = capsys.readouterr().out.splitlines()
    assert out[-1].startswith("Score: ")
    assert len(out) == 25
    assert all(len(line) == 10 for line in out[:24])
