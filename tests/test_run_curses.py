from __future__ import annotations

import curses

import pytest

from retris.game_loop import GameLoop, GamePhase
from retris.interfaces import InputEvent
from retris.run_curses import CursesInput, CursesRenderer


class FakeWindow:
    """Stand-in for a curses window that records what is drawn."""

    def __init__(self, keys=(), broken: bool = False) -> None:
        self.keys = list(keys)
        self.broken = broken
        self.getch_calls = 0
        self.timeouts: list[int] = []
        self.keypad_enabled = False
        self.chars: dict = {}
        self.texts: dict = {}
        self.boxed = 0
        self.refreshed = 0

    def keypad(self, flag: bool) -> None:
        self.keypad_enabled = flag

    def timeout(self, duration_ms: int) -> None:
        self.timeouts.append(duration_ms)

    def getch(self) -> int:
        self.getch_calls += 1
        return self.keys.pop(0) if self.keys else -1

    def addch(self, row: int, col: int, ch, attr: int = 0) -> None:
        if self.broken:
            raise curses.error("addch() returned ERR")
        self.chars[(row, col)] = (ch, attr)

    def addstr(self, row: int, col: int, text: str) -> None:
        if self.broken:
            raise curses.error("addstr() returned ERR")
        self.texts[(row, col)] = text

    def erase(self) -> None:
        self.chars.clear()
        self.texts.clear()

    def box(self) -> None:
        self.boxed += 1

    def noutrefresh(self) -> None:
        self.refreshed += 1


@pytest.fixture(autouse=True)
def fake_screen(monkeypatch):
    # These need an initialised screen in the real module.
    monkeypatch.setattr(curses, "ACS_BLOCK", ord("#"), raising=False)
    monkeypatch.setattr(curses, "color_pair", lambda n: n << 8)
    monkeypatch.setattr(curses, "doupdate", lambda: None)
    monkeypatch.setattr(curses, "beep", lambda: None)


def test_unbound_keys_count_as_one_tick() -> None:
    window = FakeWindow(keys=[ord("x")] * 5)
    source = CursesInput(window)
    source.set_tick_timeout(1000)
    assert source.wait_for_input_or_timeout() == InputEvent.TIMEOUT
    assert window.getch_calls == 1
    assert window.timeouts == [1000]
    assert window.keypad_enabled


@pytest.mark.parametrize(
    "key, event",
    [
        (curses.KEY_LEFT, InputEvent.MOVE_LEFT),
        (curses.KEY_RIGHT, InputEvent.MOVE_RIGHT),
        (curses.KEY_DOWN, InputEvent.MOVE_DOWN),
        (curses.KEY_UP, InputEvent.ROTATE),
        (ord(" "), InputEvent.HARD_DROP),
        (ord("q"), InputEvent.QUIT),
        (ord("r"), InputEvent.RESTART),
        (-1, InputEvent.TIMEOUT),
    ],
)
def test_key_map(key: int, event: InputEvent) -> None:
    source = CursesInput(FakeWindow(keys=[key]))
    assert source.wait_for_input_or_timeout() == event


def test_colour_terminal_paints_blocks() -> None:
    field, status = FakeWindow(), FakeWindow()
    renderer = CursesRenderer(field, status, colors=True)
    renderer.paint_cell(3, 4, 2)
    renderer.paint_preview(5, 6, 7)
    assert field.chars[(3, 4)] == (ord("#"), 2 << 8)
    assert status.chars[(5, 6)] == (ord("#"), 7 << 8)
    renderer.clear_cell(3, 4)
    assert field.chars[(3, 4)] == (" ", 0)


def test_monochrome_terminal_paints_catalog_letters() -> None:
    field = FakeWindow()
    renderer = CursesRenderer(field, FakeWindow(), colors=False)
    renderer.paint_cell(1, 1, 1)
    renderer.paint_cell(1, 2, 7)
    assert field.chars[(1, 1)] == ("I", 0)
    assert field.chars[(1, 2)] == ("Z", 0)


def test_writes_outside_window_are_ignored() -> None:
    renderer = CursesRenderer(FakeWindow(broken=True), FakeWindow(broken=True), colors=True)
    renderer.paint_cell(22, 14, 1)
    renderer.paint_preview(40, 40, 1)
    renderer.draw_text(40, 0, "Score: 0")


def test_loop_runs_on_curses_adapters() -> None:
    field, status = FakeWindow(keys=[ord("x"), -1, curses.KEY_LEFT, ord("q")]), FakeWindow()
    loop = GameLoop(CursesRenderer(field, status, colors=False), CursesInput(field))
    loop.run()
    assert loop.phase == GamePhase.TERMINATED
    assert (loop.state.active.row, loop.state.active.col) == (2, 4)
    assert field.timeouts == [1000]
    assert field.boxed == 1
    assert status.texts[(0, 0)] == "rETRIS"
