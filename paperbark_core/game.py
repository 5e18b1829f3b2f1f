from __future__ import annotations

from enum import Enum
from typing import Generic, Iterator, List, Optional, Set, Tuple, TypeVar, Union

from .board import Board, Square
from .region import Region
from .ruleset import Ruleset

D = TypeVar('D')


class CheckRegionError(Enum):
    """Why a candidate region was rejected. Checked in declaration order."""
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    OUT_OF_BOUNDS = "out_of_bounds"
    OVERLAPPING = "overlapping"
    NOT_CONTIGUOUS = "not_contiguous"
    NOT_IN_DICTIONARY = "not_in_dictionary"


class StaleRegionError(RuntimeError):
    """Raised when a CheckedRegion is reused or its candidate changed after validation."""


class CheckedRegion:
    """
    Proof that a candidate passed Game.check_region.

    Refers to the candidate itself, not a copy. It is meant to be handed
    straight to Game.add_region and can be used only once.
    """

    def __init__(self, region: Region) -> None:
        self.region = region
        self._validated = region.snapshot()
        self._used = False

    def is_stale(self) -> bool:
        return self._used or self.region.snapshot() != self._validated

    def consume(self) -> Region:
        if self._used:
            raise StaleRegionError("checked region was already committed")
        if self.region.snapshot() != self._validated:
            raise StaleRegionError("candidate region changed after it was checked")
        self._used = True
        return self.region


CheckResult = Union[CheckedRegion, CheckRegionError]


class Game(Generic[D]):
    """
    Committed regions of one puzzle, plus the rules that admit new ones.

    Each committed region carries a caller-supplied label (e.g. a display
    color) that the game never inspects. No two committed regions share a
    square; this is enforced when regions are committed.
    """

    def __init__(self, board: Board, ruleset: Ruleset) -> None:
        self._board = board
        self._ruleset = ruleset
        self._regions: List[Tuple[Region, D]] = []

    @property
    def board(self) -> Board:
        return self._board

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    def regions(self) -> Iterator[Tuple[Region, D]]:
        return iter(self._regions)

    def check_region(self, region: Region) -> CheckResult:
        """
        Validates a candidate region. The first failing check wins:
        size bounds, board bounds, overlap, contiguity, then dictionary.
        """
        if region.size() < self._ruleset.min_length:
            return CheckRegionError.TOO_SHORT
        if region.size() > self._ruleset.max_length:
            return CheckRegionError.TOO_LONG
        if not region.is_in_bounds(self._board):
            return CheckRegionError.OUT_OF_BOUNDS
        if any(not self.is_square_free(s) for s in region.squares()):
            return CheckRegionError.OVERLAPPING
        if not region.is_contiguous():
            return CheckRegionError.NOT_CONTIGUOUS
        if region.word(self._board) not in self._ruleset.dictionary:
            return CheckRegionError.NOT_IN_DICTIONARY
        return CheckedRegion(region)

    def add_region(self, checked: CheckedRegion, label: D) -> None:
        """Commits a copy of a freshly checked region under ``label``."""
        region = checked.consume()
        if any(not self.is_square_free(s) for s in region.squares()):
            raise StaleRegionError("board changed after the region was checked")
        self._regions.append((region.copy(), label))

    def try_add_region(self, region: Region, label: D) -> Optional[CheckRegionError]:
        """Checks and commits in one step; returns the error on failure."""
        result = self.check_region(region)
        if isinstance(result, CheckRegionError):
            return result
        self.add_region(result, label)
        return None

    def remove_region(self, square: Square) -> Optional[Tuple[Region, D]]:
        """Removes and returns the committed region containing ``square``, if any."""
        for i, entry in enumerate(self._regions):
            if square in entry[0]:
                # swap-remove; the order of the rest is not preserved
                last = self._regions.pop()
                if i < len(self._regions):
                    self._regions[i] = last
                return entry
        return None

    def region_at(self, square: Square) -> Optional[Tuple[Region, D]]:
        for entry in self._regions:
            if square in entry[0]:
                return entry
        return None

    def is_square_free(self, square: Square) -> bool:
        return self.region_at(square) is None

    def covered_squares(self) -> Set[Square]:
        covered: Set[Square] = set()
        for region, _ in self._regions:
            covered.update(region.squares())
        return covered

    def uncovered_count(self) -> int:
        covered = self.covered_squares()
        return sum(1 for s in self._board.squares() if s not in covered)

    def is_complete(self) -> bool:
        """True once every board square belongs to a committed region."""
        return self.uncovered_count() == 0
