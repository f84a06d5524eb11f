from __future__ import annotations


class TileClearError(Exception):
    """Base class for errors raised by the TileClear core."""


class InvalidCoordinate(TileClearError, ValueError):
    """A tap landed outside the board."""

    def __init__(self, x: int, y: int, cols: int, rows: int) -> None:
        super().__init__(f"({x}, {y}) is outside the {cols}x{rows} board")
        self.x = x
        self.y = y


class InvalidOperation(TileClearError):
    """An operation that the current session phase does not accept."""


class GenerationError(TileClearError, RuntimeError):
    """No playable board was produced within the retry cap."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"no playable board after {attempts} attempts")
        self.attempts = attempts
