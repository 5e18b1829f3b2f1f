"""
Paperbark core Python package.

This package contains the data structures and pure-logic helpers of the
cell tower word puzzle, kept separate from the CLI and the Flask app so
they are easy to test.
Modules:
- board.py: Square, Board
- region.py: Region
- ruleset.py: Ruleset
- game.py: Game, CheckedRegion, CheckRegionError
- puzzle.py: loading puzzle data from JSON files or the web
- session.py: PlaySession (cursor, candidate region, status messages)
- cli.py: terminal front end
"""
