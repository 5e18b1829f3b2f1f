from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

import requests

from .game import Game
from .puzzle import PuzzleData, PuzzleFormatError
from .session import PlaySession

HELP = (
    "Commands: w/a/s/d move (several per line allowed, e.g. 'ddw'), "
    "x toggle square, e commit word, r remove region, i reopen region, q quit"
)


def load_puzzle(args: argparse.Namespace) -> PuzzleData:
    if args.command == 'today':
        return PuzzleData.from_web_today()
    if args.command == 'day':
        return PuzzleData.from_web(args.puzzle_id)
    return PuzzleData.from_paths(args.dictionary, args.game)


def split_commands(line: str) -> List[str]:
    """Splits an input line into single key commands. Runs like 'ddw' expand to one key each."""
    keys: List[str] = []
    for token in line.split():
        if len(token) > 1 and set(token.lower()) <= set('wasd'):
            keys.extend(token.lower())
        else:
            keys.append(token)
    return keys


def play(session: PlaySession, read_line: Callable[[str], str] = input,
         write: Callable[[str], None] = print) -> None:
    write(HELP)
    while session.running:
        write(session.render())
        status = session.status_text()
        if status:
            write(status)
        if session.game.is_complete():
            write("Puzzle complete!")
            return
        try:
            line = read_line('> ')
        except EOFError:
            return
        for key in split_commands(line):
            if not session.handle_key(key):
                write(f"unknown command {key!r}")
                write(HELP)
                break
            if not session.running:
                break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='paperbark',
        description='A terminal clone of the cell tower word puzzle',
    )
    parser.add_argument('--check-only', action='store_true',
                        help='Print the puzzle board and rules, then exit')
    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('today', help="Play today's puzzle")
    day = sub.add_parser('day', help='Play a puzzle by id')
    day.add_argument('puzzle_id', type=int)
    local = sub.add_parser('local', help='Play a puzzle from local JSON files')
    local.add_argument('dictionary', help='Path to the dictionary JSON (list of words)')
    local.add_argument('game', help='Path to the puzzle JSON')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        data = load_puzzle(args)
        board = data.board()
        ruleset = data.ruleset()
    except requests.RequestException as e:
        print(f"error: could not download puzzle: {e}", file=sys.stderr)
        return 2
    except (OSError, PuzzleFormatError) as e:
        print(f"error: could not load puzzle: {e}", file=sys.stderr)
        return 2

    game: Game[str] = Game(board, ruleset)
    session = PlaySession(game)
    if args.check_only:
        print("\n".join(board.rows()))
        print(f"Words of {ruleset.min_length}-{ruleset.max_length} letters, "
              f"{len(ruleset.dictionary)} in dictionary")
        return 0
    play(session)
    return 0


if __name__ == '__main__':
    sys.exit(main())
