"""pygame front-end for the falltris engine.

Draws the snapshot produced by :class:`~falltris.game_state.Game` and turns
key presses into moves.  Key handling is edge-triggered: one ``KEYDOWN``
event yields at most one move, so holding a key does not repeat it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pygame

from .board import Move
from .config import DEFAULT_CONFIG, GameConfig
from .game_state import Game, GameSnapshot, GameState
from .player import Autopilot, RandomPlayer
from .tetromino import Orientation, Piece, Tetromino

logger = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 27
MARGIN = CELL_SIZE
SIDE_PANEL_WIDTH = CELL_SIZE * 5
# Frames per second to run the game loop at
FPS = 60

GRID_LINE_COLOR = (0, 0, 0)
TEXT_COLOR = (255, 255, 255)
TITLE_COLOR = (240, 240, 0)
SHADOW_COLOR = (0, 0, 0)
BACKGROUND_COLOR = (90, 90, 100)

KEY_TO_MOVE: Dict[int, Move] = {
    pygame.K_LEFT: Move.LEFT,
    pygame.K_RIGHT: Move.RIGHT,
    pygame.K_DOWN: Move.DOWN,
    pygame.K_UP: Move.ROTATE,
    pygame.K_SPACE: Move.DROP,
}


def _empty_cell_color(x: int, y: int) -> tuple[int, int, int]:
    # Checkerboard, every other row slightly darker.
    shade = 40 if (x + y) % 2 == 0 else 50
    if y % 2 == 0:
        shade = int(shade * 0.9)
    return (shade, shade, shade)


def _draw_text(screen: pygame.Surface, font: pygame.font.Font, text: str, pos, color) -> None:
    x, y = pos
    screen.blit(font.render(text, True, SHADOW_COLOR), (x + 3, y + 3))
    screen.blit(font.render(text, True, color), (x, y))


def draw_board(screen: pygame.Surface, snapshot: GameSnapshot) -> None:
    """Render the grid, including the active piece."""

    height, width = snapshot.grid.shape
    for y in range(height):
        for x in range(width):
            value = Tetromino(int(snapshot.grid[y, x]))
            color = _empty_cell_color(x, y) if value is Tetromino.E else value.color
            rect = pygame.Rect(MARGIN + x * CELL_SIZE, MARGIN + y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            if value is not Tetromino.E:
                pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)
    outline = pygame.Rect(MARGIN, MARGIN, width * CELL_SIZE, height * CELL_SIZE)
    pygame.draw.rect(screen, GRID_LINE_COLOR, outline, 4)


def draw_side_panel(screen: pygame.Surface, font: pygame.font.Font, snapshot: GameSnapshot) -> None:
    """Render the score and the lookahead queue to the right of the grid."""

    left = MARGIN * 2 + snapshot.grid.shape[1] * CELL_SIZE
    _draw_text(screen, font, "Score", (left, MARGIN), TEXT_COLOR)
    _draw_text(screen, font, str(snapshot.score), (left, MARGIN + CELL_SIZE), TEXT_COLOR)
    _draw_text(screen, font, "Next", (left, MARGIN + CELL_SIZE * 3), TEXT_COLOR)

    small = CELL_SIZE // 2
    top = MARGIN + CELL_SIZE * 5
    for index, shape in enumerate(snapshot.next_pieces):
        # Preview cells are drawn relative to the shape's leftmost column.
        cells = Piece(shape, orientation=Orientation.UP).occupied_cells()
        min_x = min(x for x, _ in cells)
        for x, y in cells:
            rect = pygame.Rect(
                left + (x - min_x) * small,
                top + index * small * 3 + y * small,
                small,
                small,
            )
            pygame.draw.rect(screen, shape.color, rect)
            pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)


def draw_overlay(screen: pygame.Surface, fonts: List[pygame.font.Font], snapshot: GameSnapshot) -> None:
    """Render the menu or game-over text when not playing."""

    big, small = fonts
    centre_x = MARGIN + snapshot.grid.shape[1] * CELL_SIZE // 2
    centre_y = MARGIN + snapshot.grid.shape[0] * CELL_SIZE // 2
    if snapshot.state is GameState.MENU:
        _draw_text(screen, big, "Falltris", (centre_x - 100, centre_y - 60), TITLE_COLOR)
        _draw_text(screen, small, "Press space to start", (centre_x - 100, centre_y + 10), TEXT_COLOR)
    elif snapshot.state is GameState.GAME_OVER:
        _draw_text(screen, big, "Game over!", (centre_x - 120, centre_y - 60), TITLE_COLOR)
        _draw_text(screen, small, f"Score {snapshot.score}", (centre_x - 100, centre_y + 10), TEXT_COLOR)
        _draw_text(screen, small, "Press space to restart", (centre_x - 100, centre_y + 40), TEXT_COLOR)


def handle_key(event: pygame.event.Event, game: Game) -> Optional[Move]:
    """Translate a key press into a state change or a move for this frame."""

    if game.state is not GameState.PLAYING:
        if event.key == pygame.K_SPACE:
            game.start()
        return None
    return KEY_TO_MOVE.get(event.key)


class GameRunner:
    """Own the window and drive the game loop until the window closes."""

    def __init__(self, config: Optional[GameConfig] = None, *, autoplay: bool = False) -> None:
        self.config = config or DEFAULT_CONFIG
        self.game = Game(self.config)
        self.autopilot = Autopilot(RandomPlayer(seed=self.config.seed)) if autoplay else None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def _window_size(self) -> tuple[int, int]:
        width = MARGIN * 2 + self.config.width * CELL_SIZE + SIDE_PANEL_WIDTH
        height = MARGIN * 2 + self.config.height * CELL_SIZE
        return width, height

    def _frame_moves(self) -> List[Move]:
        moves: List[Move] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                    continue
                move = handle_key(event, self.game)
                if move is not None:
                    moves.append(move)
        if self.autopilot is not None and self.game.state is GameState.PLAYING:
            move = self.autopilot.next_move(self.game.board, self.game.active)
            if move is not None:
                moves.append(move)
        return moves

    def run(self) -> None:
        pygame.init()
        try:
            screen = pygame.display.set_mode(self._window_size())
            pygame.display.set_caption("Falltris")
            clock = pygame.time.Clock()
            fonts = [pygame.font.SysFont(None, 72), pygame.font.SysFont(None, 30)]
            logger.info("Window opened")

            if self.autopilot is not None:
                self.game.start()

            self._running = True
            while self._running:
                clock.tick(FPS)
                moves = self._frame_moves()
                self.game.tick(moves)
                if self.autopilot is not None and self.game.state is GameState.GAME_OVER:
                    self.autopilot.clear()
                    self.game.restart()

                snapshot = self.game.snapshot()
                screen.fill(BACKGROUND_COLOR)
                draw_board(screen, snapshot)
                draw_side_panel(screen, fonts[1], snapshot)
                draw_overlay(screen, fonts, snapshot)
                pygame.display.flip()
        finally:
            pygame.quit()
            logger.info("Window closed")


def main(config: Optional[GameConfig] = None, *, autoplay: bool = False) -> None:
    GameRunner(config, autoplay=autoplay).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
