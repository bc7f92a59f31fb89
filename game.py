from __future__ import annotations

# Facade module that re-exports the tubes engine.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under tubes_core/*.

from tubes_core.tube import (
    EMPTY,
    ColorChunk,
    Slot,
    Tube,
    TubeFullError,
    pour_chunk,
    revert_chunk,
)
from tubes_core.pool import ColorPool
from tubes_core.log import Action, ActionLog, LogEmptyError
from tubes_core.board import Board
from tubes_core.validate import BoardInputError, BoardValidationError, validate_slots
from tubes_core.reader import (
    BoardFileNotFoundError,
    BoardParseError,
    InconsistentRowError,
    RawBoard,
    load_board,
    parse_board_lines,
    read_board_file,
)
from tubes_core.solver import (
    SearchStats,
    find_solution,
    format_solution,
    write_solution,
)
from tubes_core.seed import fresh_seed
from tubes_core.play import INVALID, MOVE, QUIT, REVERT, parse_move, play


def main() -> None:
    # CLI driver delegated to tubes_core.cli
    from tubes_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
