from __future__ import annotations

# Facade module that re-exports the Paperbark core API for the Flask app,
# the CLI and the tests. Single-responsibility modules live under paperbark_core/*.

from paperbark_core.board import Board, Coord, Square
from paperbark_core.region import Region, reading_order
from paperbark_core.ruleset import Ruleset
from paperbark_core.game import (
    CheckedRegion,
    CheckRegionError,
    CheckResult,
    Game,
    StaleRegionError,
)
from paperbark_core.puzzle import (
    EPOCH,
    GameData,
    PuzzleData,
    PuzzleFormatError,
    puzzle_id_for,
)
from paperbark_core.session import PALETTE, PlaySession, status_message

__all__ = [
    'Board',
    'Coord',
    'Square',
    'Region',
    'reading_order',
    'Ruleset',
    'CheckedRegion',
    'CheckRegionError',
    'CheckResult',
    'Game',
    'StaleRegionError',
    'EPOCH',
    'GameData',
    'PuzzleData',
    'PuzzleFormatError',
    'puzzle_id_for',
    'PALETTE',
    'PlaySession',
    'status_message',
]
