from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .board import Board, Shape
from .match import ScannedTile


class Mode(Enum):
    TIMED = "timed"
    FREE = "free"

    @classmethod
    def parse(cls, value: 'Mode | str') -> 'Mode':
        return value if isinstance(value, Mode) else cls(str(value).strip().lower())


class Phase(Enum):
    NOT_STARTED = "not-started"
    ACTIVE = "active"
    ENDED = "ended"


class Outcome(Enum):
    HIT = "hit"
    MISS = "miss"
    IGNORED = "ignored"


class EndReason(Enum):
    BOARD_CLEARED = "board cleared"
    NO_MOVES = "no moves left"
    TIME_EXPIRED = "time expired"


@dataclass(frozen=True)
class TapResult:
    """What a single tap did. ``time_left`` is None in free mode."""
    outcome: Outcome
    score_after: int
    remaining_tiles: int
    time_left: Optional[int]
    ended: bool
    end_reason: Optional[EndReason] = None
    removed: Tuple[ScannedTile, ...] = ()
    penalty: int = 0

    @property
    def removed_count(self) -> int:
        return len(self.removed)


@dataclass(frozen=True)
class TickResult:
    time_left_after: Optional[int]
    ended: bool
    end_reason: Optional[EndReason] = None
    ticked: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session handed to the presentation layer."""
    board: Optional[Board] = field(repr=False)
    score: int
    time_left: Optional[int]
    ended: bool
    mode: Mode
    shape: Optional[Shape]
    phase: Phase
    timer_started: bool
    end_reason: Optional[EndReason]
    remaining: int
