from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

from .board import Board, Coord, Shape
from .config import GameConfig
from .errors import InvalidCoordinate, InvalidOperation
from .generate import generate_board
from .match import ScannedTile, apply_removal, has_any_playable_move, pick_removable, playable_cells
from .state import EndReason, Mode, Outcome, Phase, Snapshot, TapResult, TickResult
from .timer import Countdown, Scheduler

logger = logging.getLogger(__name__)

BoardGenerator = Callable[..., Board]


class GameSession:
    """
    One game: board, score, countdown and end state.

    The caller owns the session and drives it through ``reset``, ``tap`` and
    ``tick``. Taps that cannot apply (before the first reset, after the game
    has ended, on a tile) come back as ``Outcome.IGNORED``; only taps outside
    the board raise.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        generator: BoardGenerator = generate_board,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.countdown = Countdown(scheduler)
        self._generator = generator
        self._rng = rng
        self.board: Optional[Board] = None
        self.mode: Mode = self.config.default_mode
        self.shape: Optional[Shape] = None
        self.score = 0
        self.time_left = self.config.start_time
        self.timer_started = False
        self.phase = Phase.NOT_STARTED
        self.end_reason: Optional[EndReason] = None

    @classmethod
    def from_board(
        cls,
        board: Board,
        mode: 'Mode | str | None' = None,
        shape: 'Shape | str | None' = None,
        score: int = 0,
        time_left: Optional[int] = None,
        timer_started: bool = False,
        end_reason: 'EndReason | None' = None,
        ended: bool = False,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> 'GameSession':
        """Rebuilds a session around an existing board, e.g. from a JSON payload."""
        session = cls(config=config, scheduler=scheduler)
        if score < 0:
            raise ValueError("score must be non-negative")
        if time_left is not None and time_left < 0:
            raise ValueError("time_left must be non-negative")
        session.board = board
        session.mode = Mode.parse(mode) if mode is not None else session.config.default_mode
        session.shape = Shape.parse(shape) if shape is not None else None
        session.score = score
        session.time_left = session.config.start_time if time_left is None else time_left
        session.timer_started = bool(timer_started) and session.mode is Mode.TIMED
        session.end_reason = end_reason
        if ended or end_reason is not None:
            session.phase = Phase.ENDED
        else:
            session.phase = Phase.ACTIVE
            if session.timer_started:
                session.countdown.start(session.tick)
        return session

    # ---------- read side ----------

    @property
    def ended(self) -> bool:
        return self.phase is Phase.ENDED

    @property
    def remaining(self) -> int:
        return self.board.remaining() if self.board is not None else 0

    def reported_time(self) -> Optional[int]:
        """Seconds left, or None in free mode where there is no budget."""
        return self.time_left if self.mode is Mode.TIMED else None

    def get_snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board.copy() if self.board is not None else None,
            score=self.score,
            time_left=self.reported_time(),
            ended=self.ended,
            mode=self.mode,
            shape=self.shape,
            phase=self.phase,
            timer_started=self.timer_started,
            end_reason=self.end_reason,
            remaining=self.remaining,
        )

    def preview(self, x: int, y: int) -> List[ScannedTile]:
        """Tiles a tap on (x, y) would remove, without changing anything."""
        board = self._require_in_bounds(x, y)
        if board is None or not board.is_empty(x, y):
            return []
        return pick_removable(board, x, y)

    def hint(self) -> Optional[Coord]:
        if self.board is None or self.ended:
            return None
        return next(playable_cells(self.board), None)

    # ---------- transitions ----------

    def reset(self, mode: 'Mode | str | None' = None, shape: 'Shape | str | None' = None,
              seed: Optional[int] = None) -> Snapshot:
        """Starts a new game. A failed deal leaves the current game untouched."""
        new_mode = Mode.parse(mode) if mode is not None else self.config.default_mode
        new_shape = Shape.parse(shape) if shape is not None else self.config.default_shape
        rng = random.Random(seed) if seed is not None else self._rng
        board = self._generator(new_shape, rng=rng, max_attempts=self.config.max_generation_attempts)

        self.countdown.stop()
        self.board = board
        self.mode = new_mode
        self.shape = new_shape
        self.score = 0
        self.time_left = self.config.start_time
        self.timer_started = False
        self.end_reason = None
        self.phase = Phase.ACTIVE
        logger.info("new %s game on %s board (%dx%d)", new_mode.value, new_shape.value, board.cols, board.rows)
        return self.get_snapshot()

    def check_tap(self, x: int, y: int) -> Board:
        """Raises InvalidCoordinate or InvalidOperation if a tap on (x, y) cannot apply."""
        if self.board is None or self.phase is Phase.NOT_STARTED:
            raise InvalidOperation("no game in progress")
        if self.ended:
            raise InvalidOperation("the game has ended")
        board = self.board
        self._require_in_bounds(x, y)
        if not board.is_empty(x, y):
            raise InvalidOperation(f"({x}, {y}) holds a tile")
        return board

    def tap(self, x: int, y: int) -> TapResult:
        try:
            board = self.check_tap(x, y)
        except InvalidOperation as e:
            logger.debug("tap ignored: %s", e)
            return self._tap_result(Outcome.IGNORED)

        removable = pick_removable(board, x, y)
        if not removable:
            return self._miss()

        apply_removal(board, removable)
        self.score += len(removable)
        logger.debug("tap (%d, %d) removed %d tiles, score %d", x, y, len(removable), self.score)
        if self.mode is Mode.TIMED and not self.timer_started:
            self.timer_started = True
            self.countdown.start(self.tick)

        if board.remaining() == 0:
            self._end(EndReason.BOARD_CLEARED)
        elif not has_any_playable_move(board):
            self._end(EndReason.NO_MOVES)
        return self._tap_result(Outcome.HIT, removed=tuple(removable))

    def tick(self) -> TickResult:
        """Advances the countdown by one second while a timed game's timer runs."""
        if self.phase is not Phase.ACTIVE or self.mode is not Mode.TIMED or not self.timer_started:
            return TickResult(self.reported_time(), self.ended, self.end_reason)
        self.time_left = max(0, self.time_left - 1)
        if self.time_left == 0:
            self._end(EndReason.TIME_EXPIRED)
        return TickResult(self.time_left, self.ended, self.end_reason, ticked=True)

    # ---------- helpers ----------

    def _require_in_bounds(self, x: int, y: int) -> Optional[Board]:
        board = self.board
        if board is not None and not board.in_bounds(x, y):
            raise InvalidCoordinate(x, y, board.cols, board.rows)
        return board

    def _miss(self) -> TapResult:
        penalty = 0
        if self.mode is Mode.TIMED and self.timer_started:
            penalty = min(self.config.penalty_seconds, self.time_left)
            self.time_left -= penalty
            logger.debug("miss costs %d seconds, %d left", penalty, self.time_left)
            if self.time_left == 0:
                self._end(EndReason.TIME_EXPIRED)
        return self._tap_result(Outcome.MISS, penalty=penalty)

    def _end(self, reason: EndReason) -> None:
        self.phase = Phase.ENDED
        self.end_reason = reason
        self.countdown.stop()
        logger.info("game over: %s, score %d", reason.value, self.score)

    def _tap_result(self, outcome: Outcome, removed: Tuple[ScannedTile, ...] = (), penalty: int = 0) -> TapResult:
        return TapResult(
            outcome=outcome,
            score_after=self.score,
            remaining_tiles=self.remaining,
            time_left=self.reported_time(),
            ended=self.ended,
            end_reason=self.end_reason,
            removed=removed,
            penalty=penalty,
        )
