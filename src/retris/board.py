"""Board representation for the playing field.

The field is a flat, row-major ``numpy`` array of ``height * width`` cells.
``0`` marks an empty cell; any other value is the identifier of the shape
that was locked there.  The coordinate API is 1-indexed: row 1 is the top
visible row and column 1 the leftmost column.  Rows at or above 0 form the
staging area where a freshly spawned piece may hang before it enters the
field.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, MAX_LEVEL, WIDTH

if TYPE_CHECKING:  # pragma: no cover
    from .interfaces import Renderer
    from .tetromino import Tetromino

LOGGER = logging.getLogger(__name__)

Grid = NDArray[np.uint8]

# Returned by :meth:`Board.index` for coordinates outside the field.
OUT_OF_RANGE = -1

# Base reward for locking a piece, reduced by the current level.
LOCK_SCORE = 10


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros(width * height, dtype=np.uint8)


class Board:
    """Fixed-size playing field holding the locked cells."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    @property
    def size(self) -> int:
        return self.width * self.height

    def index(self, row: int, col: int) -> int:
        """Return the flat offset of ``(row, col)`` or :data:`OUT_OF_RANGE`."""

        if row < 1 or col < 1 or row > self.height or col > self.width:
            return OUT_OF_RANGE
        return self.width * (row - 1) + (col - 1)

    def getyx(self, idx: int) -> Tuple[int, int]:
        """Return the 1-indexed ``(row, col)`` of flat offset ``idx``."""

        row, col = divmod(idx, self.width)
        return row + 1, col + 1

    def fits(self, row: int, col: int) -> bool:
        """Return ``True`` if a block may occupy ``(row, col)``.

        Anything in the staging area (``row <= 0``) is available.  Other
        coordinates outside the field are not, and inside the field the cell
        has to be empty.
        """

        if row <= 0:
            return True
        idx = self.index(row, col)
        if idx == OUT_OF_RANGE:
            return False
        return bool(self.grid[idx] == 0)

    def get_cell(self, row: int, col: int) -> int:
        """Return the value at ``(row, col)``, ``0`` for off-field cells."""

        idx = self.index(row, col)
        if idx == OUT_OF_RANGE:
            return 0
        return int(self.grid[idx])

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Set the value at ``(row, col)``; off-field writes are dropped."""

        idx = self.index(row, col)
        if idx != OUT_OF_RANGE:
            self.grid[idx] = np.uint8(value)

    def occupied(self) -> int:
        """Return the number of non-empty cells."""

        return int(np.count_nonzero(self.grid))

    def rows(self) -> List[List[int]]:
        """Return a copy of the grid as a list of rows, top row first."""

        return self.grid.reshape(self.height, self.width).tolist()

    def lock_piece(
        self,
        piece: "Tetromino",
        level: int,
        renderer: Optional["Renderer"] = None,
    ) -> int:
        """Merge ``piece`` into the grid and return the lock reward.

        Only the piece's cells inside the visible field are written.  The
        reward is ``10 - level`` regardless of any rows the lock completes.
        """

        piece.store(renderer, self)
        award = LOCK_SCORE - level
        LOGGER.debug(
            "Locked %s at (%d, %d) for %d points", piece.symbol, piece.row, piece.col, award
        )
        return award

    def clear_full_rows(self) -> int:
        """Remove completed rows and return how many were removed.

        Rows above a removed row drop down by one for every removed row below
        them; the vacated rows at the top are left empty.
        """

        rows = self.grid.reshape(self.height, self.width)
        full_rows = np.all(rows != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = rows[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining)).ravel()
            LOGGER.debug("Cleared %d row(s)", cleared)
        return cleared

    def compact(self) -> bool:
        """Remove completed rows, returning ``True`` if any were removed.

        A ``True`` result means the field has to be repainted from scratch.
        """

        return self.clear_full_rows() > 0

    def derive_level(self, current: int) -> int:
        """Return the level for the current stack height.

        The candidate level is the flat index of the first occupied cell as a
        fraction of the field size, scaled to ``0..10`` and rounded half up.
        An empty grid counts as if the last cell were the first occupied one.
        Levels only ever go down: a candidate that is not below ``current``
        is ignored.
        """

        filled = np.flatnonzero(self.grid)
        first = int(filled[0]) if filled.size else self.size - 1
        candidate = int(first / self.size * MAX_LEVEL + 0.5)
        if candidate < current:
            LOGGER.debug("Level tightened from %d to %d", current, candidate)
            return candidate
        return current

    def redraw(self, renderer: "Renderer") -> None:
        """Repaint the whole field: frame plus every locked cell."""

        renderer.clear_field()
        for idx in np.flatnonzero(self.grid):
            row, col = self.getyx(int(idx))
            renderer.paint_cell(row, col, int(self.grid[idx]))
        renderer.draw_frame()
