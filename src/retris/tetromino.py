"""Tetromino definitions and behaviour.

Every piece is a 4x4 mask of single-character cells: ``.`` marks an empty
cell and any other character is the shape's catalog symbol.  A piece also
carries the numeric identifier of its shape (1-7, used for colour) and the
field coordinate its top-left mask cell is anchored at.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from .config import SPAWN_COL, SPAWN_ROW

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board
    from .interfaces import Renderer

BLOCK_WIDTH = 4
BLOCK_SIZE = BLOCK_WIDTH * BLOCK_WIDTH
EMPTY = "."


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes, in catalog order."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


# Mapping from ``TetrominoType`` to the identifier stored in the board.  ``0``
# is reserved for empty cells.
SHAPE_IDS: Dict[TetrominoType, int] = {t: i + 1 for i, t in enumerate(TetrominoType)}

# Reverse lookup used by renderers without colour support.
SHAPE_SYMBOLS: Dict[int, str] = {i: t.value for t, i in SHAPE_IDS.items()}

# Spawn orientation of each shape, one string per mask row.
_BASE_ROWS: Dict[TetrominoType, Tuple[str, ...]] = {
    TetrominoType.I: ("..I.", "..I.", "..I.", "..I."),
    TetrominoType.J: ("..J.", "..J.", ".JJ.", "...."),
    TetrominoType.L: (".L..", ".L..", ".LL.", "...."),
    TetrominoType.O: ("....", ".OO.", ".OO.", "...."),
    TetrominoType.S: (".S..", ".SS.", "..S.", "...."),
    TetrominoType.T: ("..T.", ".TT.", "..T.", "...."),
    TetrominoType.Z: ("..Z.", ".ZZ.", ".Z..", "...."),
}


def mask_coords(idx: int) -> Tuple[int, int]:
    """Return the local ``(row, col)`` of mask cell ``idx``."""

    return divmod(idx, BLOCK_WIDTH)


def rotated_index(idx: int) -> int:
    """Return where mask cell ``idx`` lands after one quarter turn.

    Source ``(y, x)`` moves to ``width * (width - 1) + y - x * width``.  Four
    applications map every index back onto itself.
    """

    y, x = mask_coords(idx)
    return BLOCK_WIDTH * (BLOCK_WIDTH - 1) + y - x * BLOCK_WIDTH


@dataclass
class Tetromino:
    """A piece: 4x4 mask, shape identifier and anchor position."""

    shape_id: int = 0
    cells: List[str] = field(default_factory=lambda: [EMPTY] * BLOCK_SIZE)
    row: int = 0
    col: int = 0
    _defined_rows: int = field(default=0, repr=False, compare=False)

    def add_row(self, text: str) -> None:
        """Define the next mask row from a 4-character string.

        Rows of the wrong length and rows beyond the fourth are ignored.
        """

        i = self._defined_rows
        if i >= BLOCK_WIDTH or len(text) != BLOCK_WIDTH:
            return
        self.cells[i * BLOCK_WIDTH:(i + 1) * BLOCK_WIDTH] = list(text)
        self._defined_rows = i + 1

    def setyx(self, row: int, col: int) -> None:
        """Move the anchor without any validation."""

        self.row = row
        self.col = col

    def clone(self) -> "Tetromino":
        return Tetromino(
            shape_id=self.shape_id,
            cells=list(self.cells),
            row=self.row,
            col=self.col,
            _defined_rows=self._defined_rows,
        )

    @property
    def symbol(self) -> str:
        return SHAPE_SYMBOLS.get(self.shape_id, EMPTY)

    def rows(self) -> List[str]:
        """Return the mask as four strings, top row first."""

        return [
            "".join(self.cells[i:i + BLOCK_WIDTH])
            for i in range(0, BLOCK_SIZE, BLOCK_WIDTH)
        ]

    def blocks(self, row: Optional[int] = None, col: Optional[int] = None) -> List[Tuple[int, int]]:
        """Return the field coordinates of the filled cells.

        The piece's own anchor is used unless ``row``/``col`` are given.
        """

        row = self.row if row is None else row
        col = self.col if col is None else col
        coords = []
        for idx, cell in enumerate(self.cells):
            if cell == EMPTY:
                continue
            dy, dx = mask_coords(idx)
            coords.append((row + dy, col + dx))
        return coords

    def fits(self, board: "Board", row: int, col: int) -> bool:
        """Return ``True`` if the piece may be anchored at ``(row, col)``.

        Every filled cell must lie within the field's columns and must not be
        below the last row.  Cells inside the visible field must also be
        empty on ``board``; cells at row 0 or above sit in the staging area
        and are never checked for occupancy.
        """

        for r, c in self.blocks(row, col):
            if c < 1 or c > board.width or r > board.height:
                return False
            if r > 0 and not board.fits(r, c):
                return False
        return True

    def rotate(self, board: "Board") -> bool:
        """Turn the piece a quarter turn in place if the result fits.

        Returns ``True`` when the rotation was applied.  A rotation that would
        collide is discarded and the previous mask kept; no kicks are tried.
        """

        rotated = [EMPTY] * BLOCK_SIZE
        for idx, cell in enumerate(self.cells):
            rotated[rotated_index(idx)] = cell

        previous = self.cells
        self.cells = rotated
        if not self.fits(board, self.row, self.col):
            self.cells = previous
            return False
        return True

    def fill(
        self,
        renderer: Optional["Renderer"],
        clear: bool = False,
        board: Optional["Board"] = None,
    ) -> None:
        """Paint or erase the piece, optionally recording it on ``board``.

        Cells at row 0 or above are skipped.  When ``board`` is given the
        piece's identifier is written into every filled in-field cell.
        """

        for r, c in self.blocks():
            if r <= 0:
                continue
            if renderer is not None:
                if clear:
                    renderer.clear_cell(r, c)
                else:
                    renderer.paint_cell(r, c, self.shape_id)
            if board is not None and not clear:
                board.set_cell(r, c, self.shape_id)

    def draw(self, renderer: "Renderer") -> None:
        self.fill(renderer)

    def clear(self, renderer: "Renderer") -> None:
        self.fill(renderer, clear=True)

    def store(self, renderer: Optional["Renderer"], board: "Board") -> None:
        """Draw the piece and merge it into ``board``."""

        self.fill(renderer, board=board)


def build_catalog() -> List[Tetromino]:
    """Create one template piece for every :class:`TetrominoType`."""

    catalog = []
    for shape, rows in _BASE_ROWS.items():
        piece = Tetromino(shape_id=SHAPE_IDS[shape])
        for text in rows:
            piece.add_row(text)
        catalog.append(piece)
    return catalog


class PieceGenerator:
    """Draw pieces uniformly at random, with replacement, from the catalog.

    There is no bag or repeat protection: the same shape may come up any
    number of times in a row.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        catalog: Optional[Sequence[Tetromino]] = None,
        spawn: Tuple[int, int] = (SPAWN_ROW, SPAWN_COL),
        rng: Optional[random.Random] = None,
    ) -> None:
        self.catalog: List[Tetromino] = list(build_catalog() if catalog is None else catalog)
        self.spawn = spawn
        self.rng = rng if rng is not None else random.Random(seed)

    def next(self) -> Tetromino:
        """Return a fresh piece anchored at the spawn position."""

        if not self.catalog:
            piece = Tetromino()
        else:
            piece = self.rng.choice(self.catalog).clone()
        piece.setyx(*self.spawn)
        return piece
