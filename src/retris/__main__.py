"""Command line entry point.

Run with: `python -m retris`

The terminal front-end is used by default.  ``--frontend pygame`` opens a
window instead and ``--frontend headless`` plays a scripted sequence of ticks
without any display and prints the final screen, useful as a smoke test.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import GameConfig
from .game_loop import GameLoop
from .headless import ScriptedInput, TextRenderer
from .interfaces import InputEvent

LOGGER = logging.getLogger(__name__)

# Single-letter script codes for the headless front-end.
SCRIPT_CODES = {
    "l": InputEvent.MOVE_LEFT,
    "r": InputEvent.MOVE_RIGHT,
    "d": InputEvent.MOVE_DOWN,
    "u": InputEvent.ROTATE,
    " ": InputEvent.HARD_DROP,
    ".": InputEvent.TIMEOUT,
    "R": InputEvent.RESTART,
    "q": InputEvent.QUIT,
}


def parse_script(script: str) -> List[InputEvent]:
    """Translate a script string into events; unknown letters are skipped."""

    return [SCRIPT_CODES[ch] for ch in script if ch in SCRIPT_CODES]


def run_headless(config: GameConfig, script: str) -> str:
    renderer = TextRenderer(config.width, config.height)
    loop = GameLoop(renderer, ScriptedInput(parse_script(script)), config)
    loop.run()
    return renderer.screen()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retris", description=__doc__)
    parser.add_argument(
        "--frontend",
        choices=("curses", "pygame", "headless"),
        default="curses",
        help="Where to play.",
    )
    parser.add_argument("--width", type=int, help="Field width in cells.")
    parser.add_argument("--height", type=int, help="Field height in cells.")
    parser.add_argument(
        "--level",
        dest="initial_level",
        type=int,
        help="Starting level, 10 (slowest) down to 0.",
    )
    parser.add_argument("--seed", type=int, help="Seed for the piece generator.")
    parser.add_argument("--cell-size", type=int, help="Cell size in pixels (pygame only).")
    parser.add_argument(
        "--script",
        default="." * 200,
        help="Headless only: events to replay (l r d u space . R q).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument("--log-file", help="Write log messages to this file.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(message)s",
        filename=args.log_file,
    )
    config = GameConfig.from_args(args)

    if args.frontend == "headless":
        print(run_headless(config, args.script))
    elif args.frontend == "pygame":
        from .run_pygame import run

        state = run(config)
        print(f"Score: {state.score}")
    else:
        from .run_curses import run

        state = run(config)
        print(f"Score: {state.score}")


if __name__ == "__main__":
    main()
