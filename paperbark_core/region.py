from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, List, Optional, Set

from .board import Board, Square


def reading_order(square: Square):
    """Sort key: top-to-bottom, then left-to-right."""
    return (square.y, square.x)


class Region:
    """
    A set of unique board squares claimed for one word.

    A region is not required to be contiguous or in bounds while it is being
    built; both properties are checked on demand.
    """

    def __init__(self, squares: Optional[Iterable[Square]] = None) -> None:
        self._squares: Set[Square] = set(squares or ())

    def add_square(self, square: Square) -> bool:
        """Adds a square; returns False if it was already present."""
        if square in self._squares:
            return False
        self._squares.add(square)
        return True

    def remove_square(self, square: Square) -> bool:
        """Removes a square; returns False if it was not present."""
        if square not in self._squares:
            return False
        self._squares.remove(square)
        return True

    def size(self) -> int:
        return len(self._squares)

    def squares(self) -> Iterator[Square]:
        return iter(self._squares)

    def sorted_squares(self) -> List[Square]:
        return sorted(self._squares, key=reading_order)

    def copy(self) -> 'Region':
        return Region(self._squares)

    def snapshot(self) -> FrozenSet[Square]:
        return frozenset(self._squares)

    def word(self, board: Board) -> str:
        """The word spelled by the region, read top-to-bottom then left-to-right."""
        return ''.join(board.get(s) for s in self.sorted_squares())

    def is_in_bounds(self, board: Board) -> bool:
        return all(board.contains(s) for s in self._squares)

    def is_contiguous(self) -> bool:
        """
        Checks that the squares form one 4-connected group.

        Sweeps outwards from the first square in reading order with an
        explicit frontier, moving each remaining neighbour into the reached
        set. Anything left over once the frontier empties is disconnected.
        """
        if not self._squares:
            return True

        start = min(self._squares, key=reading_order)
        remaining = set(self._squares)
        remaining.discard(start)
        frontier = [start]
        while frontier and remaining:
            current = frontier.pop()
            for nxt in current.neighbours():
                if nxt in remaining:
                    remaining.discard(nxt)
                    frontier.append(nxt)
        return not remaining

    def __contains__(self, square: object) -> bool:
        return square in self._squares

    def __len__(self) -> int:
        return len(self._squares)

    def __iter__(self) -> Iterator[Square]:
        return self.squares()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return f"Region({[s.as_tuple() for s in self.sorted_squares()]})"
