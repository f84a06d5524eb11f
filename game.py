from __future__ import annotations

# Facade module that re-exports the TileClear core.
# The Flask app, the CLI and the tests import from here;
# single-responsibility modules live under tileclear_core/*.

from typing import List, Optional

from tileclear_core.board import Board, Color, Coord, Shape
from tileclear_core.config import GameConfig, configure_logging, env_flag
from tileclear_core.errors import GenerationError, InvalidCoordinate, InvalidOperation, TileClearError
from tileclear_core.generate import PALETTE, generate_board
from tileclear_core.match import (
    DIRECTIONS,
    ScannedTile,
    apply_removal,
    has_any_playable_move,
    pick_removable,
    playable_cells,
    scan_nearest,
)
from tileclear_core.session import GameSession
from tileclear_core.state import EndReason, Mode, Outcome, Phase, Snapshot, TapResult, TickResult
from tileclear_core.timer import Countdown, PollingScheduler

__all__ = [
    "Board",
    "Color",
    "Coord",
    "Shape",
    "GameConfig",
    "configure_logging",
    "env_flag",
    "GenerationError",
    "InvalidCoordinate",
    "InvalidOperation",
    "TileClearError",
    "PALETTE",
    "generate_board",
    "DIRECTIONS",
    "ScannedTile",
    "apply_removal",
    "has_any_playable_move",
    "pick_removable",
    "playable_cells",
    "scan_nearest",
    "GameSession",
    "EndReason",
    "Mode",
    "Outcome",
    "Phase",
    "Snapshot",
    "TapResult",
    "TickResult",
    "Countdown",
    "PollingScheduler",
    "main",
]


def main(argv: Optional[List[str]] = None) -> int:
    # CLI driver delegated to tileclear_core.cli
    from tileclear_core.cli import main as _main
    return _main(argv)


if __name__ == '__main__':
    raise SystemExit(main())
