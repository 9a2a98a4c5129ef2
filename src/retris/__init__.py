"""rETRIS: a small falling-block puzzle engine."""

from .board import Board, OUT_OF_RANGE
from .config import GameConfig
from .game_loop import GameLoop, GamePhase, handle_event
from .game_state import GameState
from .headless import ScriptedInput, TextRenderer
from .interfaces import InputEvent, InputSource, Renderer
from .tetromino import PieceGenerator, Tetromino, TetrominoType, build_catalog
from .utils import render_grid, tick_timeout_ms

__all__ = [
    "Board",
    "OUT_OF_RANGE",
    "GameConfig",
    "GameLoop",
    "GamePhase",
    "GameState",
    "InputEvent",
    "InputSource",
    "PieceGenerator",
    "Renderer",
    "ScriptedInput",
    "Tetromino",
    "TetrominoType",
    "TextRenderer",
    "build_catalog",
    "handle_event",
    "render_grid",
    "tick_timeout_ms",
]
