from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Sequence

import requests

from .board import Board
from .ruleset import Ruleset

DEFAULT_BASE_URL = "https://www.andrewt.net/puzzles/cell-tower"
# Puzzle 1 was published on this day.
EPOCH = date(2022, 5, 6)


class PuzzleFormatError(ValueError):
    """Raised when puzzle or dictionary data is malformed."""


def _debug_enabled() -> bool:
    return os.getenv('PAPERBARK_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def _debug(msg: str) -> None:
    if _debug_enabled():
        print(f"[puzzle] {msg}")


def base_url() -> str:
    return os.getenv('PAPERBARK_BASE_URL', DEFAULT_BASE_URL).rstrip('/')


def request_timeout() -> float:
    try:
        return float(os.getenv('PAPERBARK_TIMEOUT', '10'))
    except ValueError:
        return 10.0


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def puzzle_id_for(day: date) -> int:
    """The id of the puzzle published on ``day``."""
    return (day - EPOCH).days + 1


@dataclass(frozen=True)
class GameData:
    """The per-puzzle JSON document."""
    width: int
    height: int
    min_size: int
    max_size: int
    regions: List[List[tuple]]  # [(x, y), ...] per region
    words: List[str]

    @classmethod
    def from_obj(cls, obj: Any) -> 'GameData':
        if not isinstance(obj, dict):
            raise PuzzleFormatError("game data must be a JSON object")
        try:
            regions = [[(int(x), int(y)) for x, y in region] for region in obj["regions"]]
            data = cls(
                width=int(obj["width"]),
                height=int(obj["height"]),
                min_size=int(obj["minSize"]),
                max_size=int(obj["maxSize"]),
                regions=regions,
                words=[str(w) for w in obj["words"]],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PuzzleFormatError(f"bad game data: {e}") from e
        if data.width <= 0 or data.height <= 0:
            raise PuzzleFormatError(f"bad board size {data.width}x{data.height}")
        covered = sum(len(region) for region in data.regions)
        if covered != data.width * data.height:
            raise PuzzleFormatError(
                f"regions cover {covered} squares, board has {data.width * data.height}"
            )
        return data


@dataclass(frozen=True)
class PuzzleData:
    """Dictionary and game data for one puzzle, as published."""
    dictionary: Sequence[str]
    game: GameData

    @classmethod
    def from_objects(cls, dictionary_obj: Any, game_obj: Any) -> 'PuzzleData':
        if not isinstance(dictionary_obj, list):
            raise PuzzleFormatError("dictionary must be a JSON list of words")
        return cls(dictionary=[str(w) for w in dictionary_obj], game=GameData.from_obj(game_obj))

    @classmethod
    def from_json(cls, dictionary_json: str, game_json: str) -> 'PuzzleData':
        try:
            dictionary_obj = json.loads(dictionary_json)
            game_obj = json.loads(game_json)
        except json.JSONDecodeError as e:
            raise PuzzleFormatError(f"invalid JSON: {e}") from e
        return cls.from_objects(dictionary_obj, game_obj)

    @classmethod
    def from_paths(cls, dictionary_path: str, game_path: str) -> 'PuzzleData':
        with open(dictionary_path, 'r', encoding='utf-8') as f:
            dictionary_json = f.read()
        with open(game_path, 'r', encoding='utf-8') as f:
            game_json = f.read()
        return cls.from_json(dictionary_json, game_json)

    @classmethod
    def from_web(cls, puzzle_id: int, session: Optional[requests.Session] = None) -> 'PuzzleData':
        """Downloads the shared dictionary and the given puzzle."""
        http = session if session is not None else requests
        base = base_url()
        timeout = request_timeout()
        words_url = f"{base}/assets/words.json"
        game_url = f"{base}/puzzles/{int(puzzle_id)}.json"
        _debug(f"fetching {words_url}")
        words_resp = http.get(words_url, timeout=timeout)
        words_resp.raise_for_status()
        _debug(f"fetching {game_url}")
        game_resp = http.get(game_url, timeout=timeout)
        game_resp.raise_for_status()
        return cls.from_json(words_resp.text, game_resp.text)

    @classmethod
    def from_web_today(cls, today: Optional[date] = None,
                       session: Optional[requests.Session] = None) -> 'PuzzleData':
        """Downloads the puzzle published today, in UTC."""
        return cls.from_web(puzzle_id_for(today or utc_today()), session=session)

    def board(self) -> Board:
        """Rebuilds the letter grid by writing each solution word over its region."""
        g = self.game
        if len(g.regions) != len(g.words):
            raise PuzzleFormatError(
                f"{len(g.regions)} regions but {len(g.words)} words"
            )
        slots: List[Optional[str]] = [None] * (g.width * g.height)
        for word, region in zip(g.words, g.regions):
            if len(word) != len(region):
                raise PuzzleFormatError(f"word {word!r} does not fit region of size {len(region)}")
            for ch, (x, y) in zip(word, region):
                if not (0 <= x < g.width and 0 <= y < g.height):
                    raise PuzzleFormatError(f"square {(x, y)} outside {g.width}x{g.height} board")
                i = y * g.width + x
                if slots[i] is not None:
                    raise PuzzleFormatError(f"square {(x, y)} covered twice")
                # one letter per square; "ß".upper() is "SS"
                slots[i] = ch.upper()[0]
        missing = [i for i, ch in enumerate(slots) if ch is None]
        if missing:
            first = missing[0]
            raise PuzzleFormatError(
                f"{len(missing)} squares not covered, first at {(first % g.width, first // g.width)}"
            )
        _debug(f"built {g.width}x{g.height} board from {len(g.words)} words")
        return Board.new(g.width, ''.join(slots))  # type: ignore[arg-type]

    def ruleset(self) -> Ruleset:
        return Ruleset(
            min_length=self.game.min_size,
            max_length=self.game.max_size,
            dictionary=frozenset(w.upper() for w in self.dictionary),
        )

