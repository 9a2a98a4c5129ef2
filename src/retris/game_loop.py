"""Event-driven game loop.

One iteration consumes a single :class:`InputEvent` (possibly ``TIMEOUT``)
from the input source, applies it to the active piece, and then performs
exactly one descent step: the piece moves down a row if it fits there and is
locked into the board otherwise.  Waiting for input with a level-derived
timeout is the gravity tick.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .config import MAX_LEVEL, GameConfig
from .game_state import GameState
from .interfaces import InputEvent, InputSource, Renderer
from .tetromino import PieceGenerator
from .utils import display_level, tick_timeout_ms

LOGGER = logging.getLogger(__name__)

TITLE = "rETRIS"
SUBTITLE = "(reyk's TETRIS)"
HELP_LINES = (
    "left / right/ down: move",
    "up: rotate   space: drop",
    "r: restart       q: quit",
)

# Status panel anchor of the next-piece preview mask
PREVIEW_ROW = 4
PREVIEW_COL = 4

_SHIFTS = {
    InputEvent.MOVE_LEFT: (0, -1),
    InputEvent.MOVE_RIGHT: (0, 1),
    InputEvent.MOVE_DOWN: (1, 0),
}


class GamePhase(str, Enum):
    """Observable states of the loop."""

    PLAYING = "playing"
    GAME_OVER = "game_over"
    TERMINATED = "terminated"


def handle_event(event: InputEvent, state: GameState) -> None:
    """Apply a movement, rotation or drop command to the active piece.

    Moves that would not fit are ignored.  Other events are no-ops here.
    """

    piece = state.active
    board = state.board
    if event in _SHIFTS:
        dy, dx = _SHIFTS[event]
        if piece.fits(board, piece.row + dy, piece.col + dx):
            piece.setyx(piece.row + dy, piece.col + dx)
    elif event == InputEvent.ROTATE:
        piece.rotate(board)
    elif event == InputEvent.HARD_DROP:
        # Deepest fitting row wins, scanning from the bottom up.
        for row in range(board.height, piece.row - 1, -1):
            if piece.fits(board, row, piece.col):
                state.add_score(row - piece.row)
                piece.setyx(row, piece.col)
                break


class GameLoop:
    """Own one session and drive it from an input source to a renderer."""

    def __init__(
        self,
        renderer: Renderer,
        input_source: InputSource,
        config: Optional[GameConfig] = None,
        generator: Optional[PieceGenerator] = None,
    ) -> None:
        self.renderer = renderer
        self.input = input_source
        self.config = config or GameConfig()
        self.state = GameState(config=self.config, generator=generator)
        self.phase = GamePhase.PLAYING

    @property
    def running(self) -> bool:
        return self.phase != GamePhase.TERMINATED

    def start(self) -> None:
        """Render the initial screen and arm the tick timer."""

        self.phase = GamePhase.PLAYING
        self.input.set_tick_timeout(tick_timeout_ms(self.state.level))
        self._render_all()
        LOGGER.info("Game started")

    def restart(self) -> None:
        """Begin a fresh session in place of the current one."""

        self.state.reset_game()
        LOGGER.info("Game restarted")
        self.start()

    def run(self) -> GameState:
        """Process events until the player quits; return the final state."""

        self.start()
        while self.running:
            self.step(self.input.wait_for_input_or_timeout())
        return self.state

    def step(self, event: InputEvent) -> GamePhase:
        """Run one loop iteration for ``event`` and return the new phase."""

        if event == InputEvent.QUIT:
            self.phase = GamePhase.TERMINATED
            LOGGER.info("Quit with score %d", self.state.score)
        elif event == InputEvent.RESTART:
            self.restart()
        elif self.phase == GamePhase.PLAYING:
            self._play(event)
        return self.phase

    def _play(self, event: InputEvent) -> None:
        state = self.state
        piece = state.active
        piece.clear(self.renderer)
        handle_event(event, state)

        if piece.fits(state.board, piece.row + 1, piece.col):
            piece.setyx(piece.row + 1, piece.col)
            piece.draw(self.renderer)
        else:
            self._lock_and_advance()
        self.renderer.present()

    def _lock_and_advance(self) -> None:
        state = self.state
        level = state.level
        removed = state.lock_and_advance(self.renderer)
        self.renderer.beep()
        if removed:
            state.board.redraw(self.renderer)
        if state.level != level:
            self.input.set_tick_timeout(tick_timeout_ms(state.level))
        if state.done:
            self.phase = GamePhase.GAME_OVER
        else:
            state.active.draw(self.renderer)
        self.render_status()

    def _render_all(self) -> None:
        self.state.board.redraw(self.renderer)
        self.state.active.draw(self.renderer)
        self.render_status()
        self.renderer.present()

    def render_status(self) -> None:
        """Draw the side panel: title, next piece, score, level and help."""

        r = self.renderer
        state = self.state
        r.clear_status()
        r.draw_text(0, 0, TITLE)
        r.draw_text(1, 0, SUBTITLE)
        r.draw_text(3, 0, "Next block:")
        upcoming = state.upcoming
        for row, col in upcoming.blocks(PREVIEW_ROW, PREVIEW_COL):
            r.paint_preview(row, col, upcoming.shape_id)
        r.draw_text(9, 0, f"Score: {state.score}")
        r.draw_text(10, 0, f"Level: {display_level(state.level, MAX_LEVEL)}")
        if state.done:
            r.draw_text(12, 0, "GAME OVER!")
        bottom = self.config.height + 2
        for i, text in enumerate(HELP_LINES):
            r.draw_text(bottom - len(HELP_LINES) + i, 0, text)
