from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

Coord = Tuple[int, int]  # (x, y)


@dataclass(frozen=True)
class Square:
    """A single board cell addressed by column ``x`` and row ``y``."""
    x: int
    y: int

    @classmethod
    def of(cls, coord: Coord) -> 'Square':
        return cls(int(coord[0]), int(coord[1]))

    def is_neighbour_of(self, other: 'Square') -> bool:
        """True for orthogonally adjacent squares only; diagonals do not count."""
        if self.y == other.y:
            return abs(self.x - other.x) == 1
        if self.x == other.x:
            return abs(self.y - other.y) == 1
        return False

    def neighbours(self) -> List['Square']:
        """The four orthogonal neighbours, which may lie off the board."""
        return [
            Square(self.x, self.y - 1),
            Square(self.x - 1, self.y),
            Square(self.x + 1, self.y),
            Square(self.x, self.y + 1),
        ]

    def as_tuple(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class Board:
    """The static letter grid, stored row-major."""
    width: int
    height: int
    grid: Tuple[str, ...]  # length == width * height

    @classmethod
    def new(cls, width: int, contents: Iterable[str]) -> 'Board':
        """Builds a board from a flat character sequence; the height is derived."""
        chars = tuple(''.join(contents))
        assert width > 0 and len(chars) % width == 0, (
            f"board of {len(chars)} characters is not a multiple of width {width}"
        )
        return cls(width=width, height=len(chars) // width, grid=chars)

    def index(self, square: Square) -> int:
        return square.y * self.width + square.x

    def contains(self, square: Square) -> bool:
        return 0 <= square.x < self.width and 0 <= square.y < self.height

    def get(self, square: Square) -> str:
        """Gets the letter at a square. Out-of-range squares raise IndexError."""
        if not self.contains(square):
            raise IndexError(f"square {square.as_tuple()} outside {self.width}x{self.height} board")
        return self.grid[self.index(square)]

    def squares(self) -> Iterator[Square]:
        """Iterates over all squares in reading order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Square(x, y)

    def rows(self) -> List[str]:
        return [''.join(self.grid[y * self.width:(y + 1) * self.width]) for y in range(self.height)]
