from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from .board import Board, Color, Shape
from .errors import GenerationError
from .match import has_any_playable_move

logger = logging.getLogger(__name__)

PALETTE: Sequence[Color] = tuple(Color)
DEFAULT_MAX_ATTEMPTS = 1000


def generate_board(
    shape: Shape,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    palette: Sequence[Color] = PALETTE,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Board:
    """
    Deals a random board with only the center cell empty.

    Colors are drawn uniformly from ``palette`` with no adjacency constraint.
    A deal whose center is not a playable move is thrown away and the whole
    board is dealt again, up to ``max_attempts`` times.
    """
    if not palette:
        raise ValueError("palette must not be empty")
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    rng = rng or random.Random(seed)
    rows, cols = shape.rows, shape.cols
    for attempt in range(1, max_attempts + 1):
        board = Board.filled(rows, cols, (rng.choice(palette) for _ in range(rows * cols)))
        board.clear(cols // 2, rows // 2)
        if has_any_playable_move(board):
            logger.debug("dealt %s board on attempt %d", shape.value, attempt)
            return board
        logger.debug("attempt %d has no playable move, redealing", attempt)
    raise GenerationError(max_attempts)
