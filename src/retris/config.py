"""Session configuration for the rETRIS engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Dimensions of the playing field.
WIDTH = 12
HEIGHT = 20

# Slowest level.  Levels count down as the stack grows.
MAX_LEVEL = 10

# Anchor of a freshly spawned piece, just above the visible field.
SPAWN_ROW = -1
SPAWN_COL = 5


@dataclass(frozen=True)
class GameConfig:
    """Static settings shared by the engine and the front-ends."""

    width: int = WIDTH
    height: int = HEIGHT
    initial_level: int = MAX_LEVEL
    spawn_row: int = SPAWN_ROW
    spawn_col: int = SPAWN_COL
    seed: Optional[int] = None
    cell_size: int = 30

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Field dimensions must be positive")
        if not 0 <= self.initial_level <= MAX_LEVEL:
            raise ValueError(f"initial_level must be within 0..{MAX_LEVEL}")

    @property
    def cells(self) -> int:
        return self.width * self.height

    @classmethod
    def from_args(cls, args) -> "GameConfig":
        """Build a config from an :mod:`argparse` namespace.

        Attributes missing from ``args`` keep their default value.
        """

        overrides = {}
        for name in ("width", "height", "initial_level", "seed", "cell_size"):
            value = getattr(args, name, None)
            if value is not None:
                overrides[name] = value
        return cls(**overrides)
