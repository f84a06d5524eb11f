from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

Coord = Tuple[int, int]  # (x, y)


class Color(str, Enum):
    """The five tile colors. Values are the hex codes the browser client paints."""
    RED = "#f44336"
    BLUE = "#2196f3"
    YELLOW = "#ffeb3b"
    GREEN = "#4caf50"
    PURPLE = "#9c27b0"

    @property
    def letter(self) -> str:
        return self.name[0]

    @classmethod
    def from_letter(cls, letter: str) -> 'Color':
        for color in cls:
            if color.letter == letter.upper():
                return color
        raise ValueError(f"unknown color letter: {letter!r}")


class Shape(Enum):
    WIDE = "wide"
    TALL = "tall"

    @property
    def rows(self) -> int:
        return 15 if self is Shape.WIDE else 25

    @property
    def cols(self) -> int:
        return 25 if self is Shape.WIDE else 15

    @classmethod
    def parse(cls, value: 'Shape | str') -> 'Shape':
        if isinstance(value, Shape):
            return value
        text = str(value).strip().lower()
        aliases = {"landscape": cls.WIDE, "portrait": cls.TALL}
        if text in aliases:
            return aliases[text]
        return cls(text)


EMPTY_MARK = "."


@dataclass
class Board:
    """Mutable grid of tiles addressed as (x, y); ``None`` marks an empty cell."""
    rows: int
    cols: int
    cells: List[List[Optional[Color]]] = field(repr=False)

    @classmethod
    def filled(cls, rows: int, cols: int, colors: Iterable[Color]) -> 'Board':
        """Builds a board from ``rows * cols`` colors given in row-major order."""
        it = iter(colors)
        cells = [[next(it) for _ in range(cols)] for _ in range(rows)]
        return cls(rows=rows, cols=cols, cells=cells)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'Board':
        """Parses letter rows such as ``["RB.", "G.Y"]``; ``.`` is an empty cell."""
        width = len(rows[0])
        cells: List[List[Optional[Color]]] = []
        for line in rows:
            if len(line) != width:
                raise ValueError("all rows must have the same length")
            cells.append([None if ch == EMPTY_MARK else Color.from_letter(ch) for ch in line])
        return cls(rows=len(rows), cols=width, cells=cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def at(self, x: int, y: int) -> Optional[Color]:
        return self.cells[y][x]

    def is_empty(self, x: int, y: int) -> bool:
        return self.cells[y][x] is None

    def clear(self, x: int, y: int) -> None:
        self.cells[y][x] = None

    def coords(self) -> Iterator[Coord]:
        for y in range(self.rows):
            for x in range(self.cols):
                yield (x, y)

    def empty_cells(self) -> Iterator[Coord]:
        for x, y in self.coords():
            if self.cells[y][x] is None:
                yield (x, y)

    def remaining(self) -> int:
        """Number of tiles still on the board."""
        return sum(1 for row in self.cells for cell in row if cell is not None)

    def copy(self) -> 'Board':
        return Board(rows=self.rows, cols=self.cols, cells=[list(row) for row in self.cells])

    def pretty(self, highlight: Optional[Iterable[Coord]] = None) -> str:
        """Generates a text dump of the board, lower-casing highlighted tiles."""
        marked = set(highlight or ())
        lines: List[str] = []
        for y in range(self.rows):
            row: List[str] = []
            for x in range(self.cols):
                cell = self.cells[y][x]
                if cell is None:
                    row.append(EMPTY_MARK)
                elif (x, y) in marked:
                    row.append(cell.letter.lower())
                else:
                    row.append(cell.letter)
            lines.append(" ".join(row))
        return "\n".join(lines)
