from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .board import Board, Color, Coord

Direction = Tuple[int, int]

# Scan order: right, left, down, up.
DIRECTIONS: Tuple[Direction, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class ScannedTile:
    """The nearest tile found by a directional scan."""
    x: int
    y: int
    color: Color

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


def scan_nearest(board: Board, x: int, y: int, direction: Direction) -> Optional[ScannedTile]:
    """Walks from (x, y) in one direction and returns the first tile, or None at the edge."""
    dx, dy = direction
    cx, cy = x + dx, y + dy
    while board.in_bounds(cx, cy):
        color = board.at(cx, cy)
        if color is not None:
            return ScannedTile(cx, cy, color)
        cx += dx
        cy += dy
    return None


def pick_removable(board: Board, x: int, y: int) -> List[ScannedTile]:
    """
    Returns the scanned neighbors of an empty cell that a tap would remove.

    Each of the four directions contributes at most its nearest tile. A tile
    qualifies when its color occurs at least twice among those candidates, so
    the result holds 0, 2, 3 or 4 tiles.
    """
    nearest = [tile for tile in (scan_nearest(board, x, y, d) for d in DIRECTIONS) if tile is not None]
    counts = Counter(tile.color for tile in nearest)
    return [tile for tile in nearest if counts[tile.color] >= 2]


def apply_removal(board: Board, tiles: Iterable[ScannedTile]) -> int:
    """Clears the given tiles in place and returns how many were removed."""
    removed = 0
    for tile in tiles:
        board.clear(tile.x, tile.y)
        removed += 1
    return removed


def playable_cells(board: Board) -> Iterator[Coord]:
    """Yields every empty cell whose tap would remove something, row-major."""
    for x, y in board.empty_cells():
        if pick_removable(board, x, y):
            yield (x, y)


def has_any_playable_move(board: Board) -> bool:
    return next(playable_cells(board), None) is not None
