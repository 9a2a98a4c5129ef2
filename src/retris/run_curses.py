"""Terminal front-end built on :mod:`curses`.

The status panel sits left of a boxed playing field centred on the screen.
With colour support every cell is painted as a solid block in its shape's
colour; otherwise the shape's catalog letter is drawn instead.
"""

from __future__ import annotations

import curses
import logging
from typing import Optional

from .config import GameConfig
from .game_loop import GameLoop
from .game_state import GameState
from .interfaces import InputEvent
from .tetromino import SHAPE_SYMBOLS

LOGGER = logging.getLogger(__name__)

# Foreground/background per shape identifier (I, J, L, O, S, T, Z)
COLOR_PAIRS = {
    1: curses.COLOR_CYAN,
    2: curses.COLOR_BLUE,
    3: curses.COLOR_WHITE,
    4: curses.COLOR_YELLOW,
    5: curses.COLOR_GREEN,
    6: curses.COLOR_MAGENTA,
    7: curses.COLOR_RED,
}

KEY_MAP = {
    curses.KEY_LEFT: InputEvent.MOVE_LEFT,
    curses.KEY_RIGHT: InputEvent.MOVE_RIGHT,
    curses.KEY_DOWN: InputEvent.MOVE_DOWN,
    curses.KEY_UP: InputEvent.ROTATE,
    ord(" "): InputEvent.HARD_DROP,
    ord("q"): InputEvent.QUIT,
    ord("r"): InputEvent.RESTART,
}


def init_colors() -> bool:
    """Set up one colour pair per shape; return ``False`` if unsupported."""

    if not curses.has_colors():
        return False
    curses.start_color()
    for pair, background in COLOR_PAIRS.items():
        curses.init_pair(pair, curses.COLOR_BLACK, background)
    return True


class CursesRenderer:
    """Draw into a field window and a status window."""

    def __init__(self, field: "curses.window", status: "curses.window", colors: bool) -> None:
        self.field = field
        self.status = status
        self.colors = colors

    def _put(self, window: "curses.window", row: int, col: int, ch, attr: int = 0) -> None:
        try:
            window.addch(row, col, ch, attr)
        except curses.error:
            # Writing the bottom-right corner moves the cursor off-window.
            pass

    def _paint(self, window: "curses.window", row: int, col: int, shape_id: int) -> None:
        if self.colors:
            self._put(window, row, col, curses.ACS_BLOCK, curses.color_pair(shape_id))
        else:
            self._put(window, row, col, SHAPE_SYMBOLS.get(shape_id, "#"))

    def paint_cell(self, row: int, col: int, shape_id: int) -> None:
        self._paint(self.field, row, col, shape_id)

    def paint_preview(self, row: int, col: int, shape_id: int) -> None:
        self._paint(self.status, row, col, shape_id)

    def clear_cell(self, row: int, col: int) -> None:
        self._put(self.field, row, col, " ")

    def clear_field(self) -> None:
        self.field.erase()

    def draw_frame(self) -> None:
        self.field.box()

    def clear_status(self) -> None:
        self.status.erase()

    def draw_text(self, row: int, col: int, text: str) -> None:
        try:
            self.status.addstr(row, col, text)
        except curses.error:
            pass

    def present(self) -> None:
        self.status.noutrefresh()
        self.field.noutrefresh()
        curses.doupdate()

    def beep(self) -> None:
        curses.beep()


class CursesInput:
    """Read keys from the field window with a tick timeout."""

    def __init__(self, window: "curses.window") -> None:
        self.window = window
        window.keypad(True)

    def set_tick_timeout(self, duration_ms: int) -> None:
        self.window.timeout(duration_ms)

    def wait_for_input_or_timeout(self) -> InputEvent:
        """Return the next command; unbound keys count as a plain tick."""

        return KEY_MAP.get(self.window.getch(), InputEvent.TIMEOUT)


def _play(stdscr: "curses.window", config: GameConfig) -> GameState:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    curses.noecho()
    colors = init_colors()
    stdscr.refresh()

    max_y, max_x = stdscr.getmaxyx()
    xoff = max(0, max_x // 2 - (config.width + 2) // 2)
    field = curses.newwin(config.height + 2, config.width + 2, 1, xoff)
    status = curses.newwin(config.height + 2, max(1, xoff - 2), 1, 1)

    loop = GameLoop(CursesRenderer(field, status, colors), CursesInput(field), config)
    return loop.run()


def run(config: Optional[GameConfig] = None) -> GameState:
    """Take over the terminal and play until the player quits."""

    state = curses.wrapper(_play, config or GameConfig())
    LOGGER.info("Terminal restored")
    return state


def main() -> None:
    run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
