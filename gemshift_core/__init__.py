"""
Gemshift core Python package.

Pure-logic pieces of the match-3 engine, split out so the Flask app and the
CLI stay thin and each step can be tested on its own.
Modules:
- board.py: Tile, Coord, Grid helpers
- generate.py: settled grid generator
- matches.py: run detection
- moves.py: Move and row/column rotation
- phase.py: ResolutionPhase and its application
- spawn.py: SpawnQueue
- engine.py: PuzzleEngine
- config.py: environment settings and logging setup
"""
