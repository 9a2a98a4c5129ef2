from __future__ import annotations

from typing import Iterable

import pytest

from retris.game_loop import GameLoop
from retris.headless import ScriptedInput, TextRenderer
from retris.interfaces import InputEvent
from retris.tetromino import SHAPE_IDS, PieceGenerator, TetrominoType, build_catalog


def single_shape_generator(shape: TetrominoType) -> PieceGenerator:
    """Generator whose catalog only holds ``shape``."""

    catalog = [p for p in build_catalog() if p.shape_id == SHAPE_IDS[shape]]
    return PieceGenerator(catalog=catalog)


@pytest.fixture
def make_loop():
    def _make(shape: TetrominoType = TetrominoType.O, events: Iterable[InputEvent] = ()) -> GameLoop:
        loop = GameLoop(
            TextRenderer(),
            ScriptedInput(events),
            generator=single_shape_generator(shape),
        )
        return loop

    return _make


@pytest.fixture
def shape_generator():
    return single_shape_generator
