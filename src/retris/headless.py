"""In-memory front-end used for tests, demos and debugging.

:class:`TextRenderer` keeps the field and status panel as character buffers
and :class:`ScriptedInput` replays a fixed list of events.  Together they let
the game loop run without a window or terminal.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .config import HEIGHT, WIDTH
from .interfaces import InputEvent
from .tetromino import SHAPE_SYMBOLS

BLANK = " "


class TextRenderer:
    """Renderer that draws into lists of characters."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.cells: List[List[int]] = [[0] * width for _ in range(height)]
        self.status: Dict[int, str] = {}
        self.presented = 0
        self.beeps = 0

    def _in_field(self, row: int, col: int) -> bool:
        return 1 <= row <= self.height and 1 <= col <= self.width

    def paint_cell(self, row: int, col: int, shape_id: int) -> None:
        if self._in_field(row, col):
            self.cells[row - 1][col - 1] = shape_id

    def clear_cell(self, row: int, col: int) -> None:
        if self._in_field(row, col):
            self.cells[row - 1][col - 1] = 0

    def clear_field(self) -> None:
        self.cells = [[0] * self.width for _ in range(self.height)]

    def draw_frame(self) -> None:
        pass

    def clear_status(self) -> None:
        self.status = {}

    def draw_text(self, row: int, col: int, text: str) -> None:
        line = self.status.get(row, "")
        line = line.ljust(col)
        self.status[row] = line[:col] + text + line[col + len(text):]

    def paint_preview(self, row: int, col: int, shape_id: int) -> None:
        self.draw_text(row, col, self.glyph(shape_id))

    def present(self) -> None:
        self.presented += 1

    def beep(self) -> None:
        self.beeps += 1

    def glyph(self, shape_id: int) -> str:
        if not shape_id:
            return BLANK
        return SHAPE_SYMBOLS.get(shape_id, "#")

    def field_lines(self) -> List[str]:
        """Return the field surrounded by a frame, one string per line."""

        edge = "+" + "-" * self.width + "+"
        body = ["|" + "".join(self.glyph(v) for v in row) + "|" for row in self.cells]
        return [edge, *body, edge]

    def status_lines(self) -> List[str]:
        if not self.status:
            return []
        return [self.status.get(i, "") for i in range(max(self.status) + 1)]

    def screen(self) -> str:
        """Return field and status panel side by side."""

        field = self.field_lines()
        status = self.status_lines()
        lines = []
        for i in range(max(len(field), len(status))):
            left = field[i] if i < len(field) else " " * (self.width + 2)
            right = status[i] if i < len(status) else ""
            lines.append(f"{left}  {right}".rstrip())
        return "\n".join(lines)


class ScriptedInput:
    """Input source that replays ``events`` and then quits."""

    def __init__(self, events: Iterable[InputEvent] = ()) -> None:
        self._events = iter(events)
        self.timeouts: List[int] = []

    @property
    def timeout(self) -> int:
        return self.timeouts[-1] if self.timeouts else 0

    def set_tick_timeout(self, duration_ms: int) -> None:
        self.timeouts.append(duration_ms)

    def wait_for_input_or_timeout(self) -> InputEvent:
        return next(self._events, InputEvent.QUIT)
