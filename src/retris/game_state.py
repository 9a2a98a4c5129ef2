"""High level game state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .board import Board
from .config import GameConfig
from .interfaces import Renderer
from .tetromino import PieceGenerator, Tetromino

LOGGER = logging.getLogger(__name__)


@dataclass
class GameState:
    """Mutable state for one game session.

    ``level`` is an inverse speed: it starts at the slowest value and only
    ever decreases as the stack grows.  ``score`` never decreases within a
    session.
    """

    config: GameConfig = field(default_factory=GameConfig)
    generator: Optional[PieceGenerator] = None
    board: Optional[Board] = None
    active: Optional[Tetromino] = None
    upcoming: Optional[Tetromino] = None
    score: int = 0
    level: int = 0
    done: bool = False

    def __post_init__(self) -> None:
        if self.generator is None:
            self.generator = PieceGenerator(
                self.config.seed,
                spawn=(self.config.spawn_row, self.config.spawn_col),
            )
        if self.board is None:
            self.reset_game()

    def reset_game(self) -> None:
        """Replace the board and every counter with a fresh session."""

        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.level = self.config.initial_level
        self.done = False
        self.active = self.generator.next()
        self.upcoming = self.generator.next()

    def add_score(self, points: int) -> None:
        if points > 0:
            self.score += points

    def spawn_tetromino(self) -> Tetromino:
        """Promote the on-deck piece and draw a new one behind it."""

        self.active = self.upcoming
        self.active.setyx(self.config.spawn_row, self.config.spawn_col)
        self.upcoming = self.generator.next()
        return self.active

    def lock_and_advance(self, renderer: Optional[Renderer] = None) -> bool:
        """Lock the active piece and bring in the next one.

        The lock reward is added, completed rows are removed, the level is
        re-derived and the on-deck piece becomes active.  If that piece does
        not fit at its spawn position the session is over.  Returns ``True``
        when rows were removed and the field needs a full repaint.
        """

        self.add_score(self.board.lock_piece(self.active, self.level, renderer))
        removed = self.board.compact()
        self.level = self.board.derive_level(self.level)
        piece = self.spawn_tetromino()
        if not piece.fits(self.board, piece.row, piece.col):
            self.game_over()
        return removed

    def game_over(self) -> None:
        self.done = True
        LOGGER.info("Game over with score %d", self.score)
