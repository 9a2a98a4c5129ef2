"""Narrow interfaces between the engine and its front-ends.

The engine never talks to a window, terminal or keyboard directly.  A
front-end provides a :class:`Renderer` for output and an :class:`InputSource`
for the abstract :class:`InputEvent` stream, and the game loop drives both.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class InputEvent(str, Enum):
    """Abstract commands consumed by the game loop."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    QUIT = "quit"
    RESTART = "restart"
    TIMEOUT = "timeout"


class Renderer(Protocol):
    """Output surface for the playing field and the status panel.

    Field coordinates are 1-indexed ``(row, col)`` inside the frame, matching
    :class:`retris.board.Board`.  Status text coordinates are 0-indexed lines
    and columns of the side panel.

    Whether cells are painted in colour or with the shape's catalog letter
    is up to each renderer; the engine only passes shape identifiers.
    """

    def paint_cell(self, row: int, col: int, shape_id: int) -> None: ...

    def clear_cell(self, row: int, col: int) -> None: ...

    def clear_field(self) -> None: ...

    def draw_frame(self) -> None: ...

    def clear_status(self) -> None: ...

    def draw_text(self, row: int, col: int, text: str) -> None: ...

    def paint_preview(self, row: int, col: int, shape_id: int) -> None: ...

    def present(self) -> None: ...

    def beep(self) -> None: ...


class InputSource(Protocol):
    """Blocking event source doubling as the gravity timer."""

    def set_tick_timeout(self, duration_ms: int) -> None: ...

    def wait_for_input_or_timeout(self) -> InputEvent: ...
