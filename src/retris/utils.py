"""Utility helpers for the rETRIS engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .tetromino import Tetromino


# One level step equals a tenth of a second of waiting per tick.
TICK_MS_PER_LEVEL = 100


def tick_timeout_ms(level: int) -> int:
    """Return the gravity tick in milliseconds for ``level``.

    Lower levels are faster.  Level ``0`` still waits for one step so the
    loop never spins without blocking.
    """

    return max(1, level) * TICK_MS_PER_LEVEL


def display_level(level: int, max_level: int = 10) -> int:
    """Return the level as shown to the player, growing with difficulty."""

    return max_level - level


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).  Cells of the active piece that lie inside the field receive the
    piece's shape identifier.
    """

    grid = board.rows()
    if active is not None:
        for r, c in active.blocks():
            if 1 <= r <= board.height and 1 <= c <= board.width:
                grid[r - 1][c - 1] = active.shape_id
    return grid
