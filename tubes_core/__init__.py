"""
Tubes core Python package.

This package contains the color-sorting puzzle engine: the tube pouring
algebra, the undo log, board generation and loading, and the solver.
Modules:
- tube.py: Tube, Slot, ColorChunk
- pool.py: ColorPool (generation only)
- log.py: Action, ActionLog
- board.py: Board
- validate.py, reader.py: loading boards from text files
- solver.py: backtracking solver and solution writer
- play.py, cli.py, seed.py: interactive and command-line drivers
"""
