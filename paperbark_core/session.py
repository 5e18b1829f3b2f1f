from __future__ import annotations

from typing import Dict, List, Optional

from .board import Square
from .game import CheckRegionError, Game
from .region import Region

PALETTE: List[str] = ['red', 'green', 'yellow', 'blue', 'magenta', 'cyan']

DIRECTIONS: Dict[str, tuple] = {
    'up': (0, -1),
    'down': (0, 1),
    'left': (-1, 0),
    'right': (1, 0),
}

KEY_BINDINGS: Dict[str, str] = {
    'w': 'up', 'up': 'up',
    's': 'down', 'down': 'down',
    'a': 'left', 'left': 'left',
    'd': 'right', 'right': 'right',
    ' ': 'select', 'space': 'select', 'x': 'select',
    'enter': 'add', '\n': 'add', 'e': 'add',
    'delete': 'remove', 'del': 'remove', 'r': 'remove',
    'insert': 'remove_and_add', 'ins': 'remove_and_add', 'i': 'remove_and_add',
    'q': 'quit', 'esc': 'quit',
}


def status_message(error: CheckRegionError, word: str) -> str:
    """Human-readable text for a rejected candidate."""
    if error is CheckRegionError.TOO_SHORT:
        return "word too short"
    if error is CheckRegionError.TOO_LONG:
        return "word too long"
    if error is CheckRegionError.OUT_OF_BOUNDS:
        return "region out of bounds"
    if error is CheckRegionError.OVERLAPPING:
        return "region overlapping"
    if error is CheckRegionError.NOT_CONTIGUOUS:
        return "region must be contiguous"
    return f'unknown word "{word}"'


class PlaySession:
    """
    Interactive play state around a Game: a cursor, the candidate region
    being built, and the color handed to the next committed region.
    """

    def __init__(self, game: Game[str], palette: Optional[List[str]] = None) -> None:
        self.game = game
        self.all_colors: List[str] = list(palette or PALETTE)
        self.colors: List[str] = list(self.all_colors)
        self.cursor = Square(0, 0)
        self.candidate = Region()
        self.running = True

    def move(self, direction: str) -> Square:
        dx, dy = DIRECTIONS[direction]
        board = self.game.board
        x = min(max(self.cursor.x + dx, 0), board.width - 1)
        y = min(max(self.cursor.y + dy, 0), board.height - 1)
        self.cursor = Square(x, y)
        return self.cursor

    def select(self) -> None:
        """Toggles the cursor square in the candidate. Occupied squares are never added."""
        if not self.candidate.remove_square(self.cursor):
            if self.game.is_square_free(self.cursor):
                self.candidate.add_square(self.cursor)

    def next_color(self) -> str:
        color = self.colors.pop()
        if not self.colors:
            self.colors = list(self.all_colors)
        return color

    def add(self) -> Optional[CheckRegionError]:
        """Commits the candidate if it is valid; returns the error otherwise."""
        result = self.game.check_region(self.candidate)
        if isinstance(result, CheckRegionError):
            return result
        self.game.add_region(result, self.next_color())
        self.candidate = Region()
        return None

    def remove(self) -> None:
        """Drops the committed region under the cursor, or clears the candidate if there is none."""
        if self.game.remove_region(self.cursor) is None:
            self.candidate = Region()

    def remove_and_add(self) -> None:
        """Moves the committed region under the cursor back into the candidate."""
        removed = self.game.remove_region(self.cursor)
        if removed is not None:
            region, _ = removed
            for square in region.squares():
                self.candidate.add_square(square)

    def quit(self) -> None:
        self.running = False

    def handle_key(self, key: str) -> bool:
        """Applies one key binding; returns False for unknown keys."""
        action = KEY_BINDINGS.get(key if key in (' ', '\n') else key.strip().lower())
        if action is None:
            return False
        if action in DIRECTIONS:
            self.move(action)
        else:
            getattr(self, action)()
        return True

    def status_text(self) -> str:
        if self.candidate.size() == 0:
            return ""
        result = self.game.check_region(self.candidate)
        if isinstance(result, CheckRegionError):
            word = self.candidate.word(self.game.board) if self.candidate.is_in_bounds(self.game.board) else ""
            return status_message(result, word)
        return f'"{self.candidate.word(self.game.board)}"'

    def render(self) -> str:
        """
        Text view of the board. Committed squares are lower case, candidate
        squares are bracketed and the cursor is marked with angle brackets.
        """
        board = self.game.board
        lines: List[str] = []
        for y in range(board.height):
            cells: List[str] = []
            for x in range(board.width):
                square = Square(x, y)
                ch = board.get(square)
                if not self.game.is_square_free(square):
                    ch = ch.lower()
                if square == self.cursor:
                    cells.append(f"<{ch}>")
                elif square in self.candidate:
                    cells.append(f"[{ch}]")
                else:
                    cells.append(f" {ch} ")
            lines.append(''.join(cells))
        if self.game.is_complete():
            lines.append("*** solved ***")
        return "\n".join(lines)
