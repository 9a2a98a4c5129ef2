"""Simple pygame front-end for the rETRIS engine.

The window shows the status panel on the left and the playing field on the
right.  The engine only sees the :class:`PygameRenderer` and
:class:`PygameInput` adapters; everything pygame-specific lives here.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from .config import GameConfig
from .game_loop import GameLoop
from .game_state import GameState
from .interfaces import InputEvent

LOGGER = logging.getLogger(__name__)

# Width of the status panel in pixels
STATUS_WIDTH = 260
FONT_SIZE = 18
BACKGROUND = (0, 0, 0)
FRAME_COLOR = (200, 200, 200)
TEXT_COLOR = (220, 220, 220)
GRID_LINE = (50, 50, 50)

# Colours keyed by shape identifier (I, J, L, O, S, T, Z)
SHAPE_COLORS: Dict[int, tuple[int, int, int]] = {
    1: (0, 255, 255),
    2: (0, 0, 255),
    3: (255, 255, 255),
    4: (255, 255, 0),
    5: (0, 255, 0),
    6: (255, 0, 255),
    7: (255, 0, 0),
}

KEY_MAP = {
    pygame.K_LEFT: InputEvent.MOVE_LEFT,
    pygame.K_RIGHT: InputEvent.MOVE_RIGHT,
    pygame.K_DOWN: InputEvent.MOVE_DOWN,
    pygame.K_UP: InputEvent.ROTATE,
    pygame.K_SPACE: InputEvent.HARD_DROP,
    pygame.K_q: InputEvent.QUIT,
    pygame.K_r: InputEvent.RESTART,
}


class PygameRenderer:
    """Draw the field and status panel onto a pygame surface."""

    def __init__(self, screen: pygame.Surface, config: GameConfig) -> None:
        self.screen = screen
        self.config = config
        self.cell = config.cell_size
        self.field_x = STATUS_WIDTH
        self.font = pygame.font.Font(None, FONT_SIZE)
        self.line_height = self.font.get_linesize()
        self.char_width = self.font.size("M")[0]

    def _rect(self, row: int, col: int) -> pygame.Rect:
        # The frame occupies row/column 0, so field cells start at 1.
        return pygame.Rect(
            self.field_x + col * self.cell, row * self.cell, self.cell, self.cell
        )

    def paint_cell(self, row: int, col: int, shape_id: int) -> None:
        rect = self._rect(row, col)
        pygame.draw.rect(self.screen, SHAPE_COLORS.get(shape_id, FRAME_COLOR), rect)
        pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def clear_cell(self, row: int, col: int) -> None:
        pygame.draw.rect(self.screen, BACKGROUND, self._rect(row, col))

    def clear_field(self) -> None:
        width = (self.config.width + 2) * self.cell
        height = (self.config.height + 2) * self.cell
        self.screen.fill(BACKGROUND, pygame.Rect(self.field_x, 0, width, height))

    def draw_frame(self) -> None:
        width = (self.config.width + 2) * self.cell
        height = (self.config.height + 2) * self.cell
        outer = pygame.Rect(self.field_x, 0, width, height)
        pygame.draw.rect(self.screen, FRAME_COLOR, outer, self.cell // 2)

    def clear_status(self) -> None:
        height = (self.config.height + 2) * self.cell
        self.screen.fill(BACKGROUND, pygame.Rect(0, 0, STATUS_WIDTH, height))

    def draw_text(self, row: int, col: int, text: str) -> None:
        surface = self.font.render(text, True, TEXT_COLOR)
        self.screen.blit(surface, (8 + col * self.char_width, 8 + row * self.line_height))

    def paint_preview(self, row: int, col: int, shape_id: int) -> None:
        size = self.line_height
        rect = pygame.Rect(8 + col * size, 8 + row * self.line_height, size, size)
        pygame.draw.rect(self.screen, SHAPE_COLORS.get(shape_id, FRAME_COLOR), rect)
        pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def present(self) -> None:
        pygame.display.flip()

    def beep(self) -> None:
        """Do nothing: the window front-end gives no audible feedback.

        No sound asset ships with the game, so locking a piece is silent here.
        """


class PygameInput:
    """Translate pygame events into :class:`InputEvent` values."""

    def __init__(self) -> None:
        self.timeout_ms = 1000

    def set_tick_timeout(self, duration_ms: int) -> None:
        self.timeout_ms = duration_ms

    def wait_for_input_or_timeout(self) -> InputEvent:
        deadline = pygame.time.get_ticks() + self.timeout_ms
        while True:
            remaining = deadline - pygame.time.get_ticks()
            if remaining <= 0:
                return InputEvent.TIMEOUT
            event = pygame.event.wait(remaining)
            if event.type == pygame.NOEVENT:
                return InputEvent.TIMEOUT
            if event.type == pygame.QUIT:
                return InputEvent.QUIT
            if event.type == pygame.KEYDOWN and event.key in KEY_MAP:
                return KEY_MAP[event.key]


def run(config: Optional[GameConfig] = None) -> GameState:
    """Open a window and play until the player quits."""

    config = config or GameConfig()
    pygame.init()
    try:
        size = (
            STATUS_WIDTH + (config.width + 2) * config.cell_size,
            (config.height + 2) * config.cell_size,
        )
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption("rETRIS")
        screen.fill(BACKGROUND)
        loop = GameLoop(PygameRenderer(screen, config), PygameInput(), config)
        state = loop.run()
    finally:
        pygame.quit()
        LOGGER.info("Window closed")
    return state


def main() -> None:
    run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
