from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional

from .board import Board
from .log import ActionLog


def _debug_enabled() -> bool:
    return os.getenv('TUBES_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


@dataclass
class SearchStats:
    """Counters reported when TUBES_DEBUG is set."""
    nodes: int = 0
    max_depth: int = 0
    reverts: int = 0


def _pour_first_destination(board: Board, log: ActionLog, i_src: int) -> bool:
    """Pours `i_src` into the first destination that accepts it; other destinations are never tried."""
    for i_dst in range(board.num_tubes):
        if i_dst == i_src:
            continue
        if board.pour_is_pointless(i_src, i_dst):
            continue
        if board.pour(i_src, i_dst, log):
            return True
    return False


def _search(board: Board, log: ActionLog, depth: int, stats: SearchStats) -> bool:
    stats.nodes += 1
    stats.max_depth = max(stats.max_depth, depth)
    for i_src in range(board.num_tubes):
        if board.tubes[i_src].is_pure():
            continue
        if not _pour_first_destination(board, log, i_src):
            continue
        if board.is_solved():
            return True
        if _search(board, log, depth + 1, stats):
            return True
        board.revert_one(log)
        stats.reverts += 1
    return False


def _depth_bound(board: Board) -> int:
    # Every pour the search makes lowers (2 * color runs - non-empty tubes), so a
    # path never exceeds twice the number of slots.
    return 2 * board.num_tubes * board.num_slots


def find_solution(board: Board, stats: Optional[SearchStats] = None) -> Optional[ActionLog]:
    """
    Naive backtracking search for one sequence of pours that solves `board`.

    Returns the log of the found path with the board left in its solved
    arrangement, or None with the board unchanged. An already solved board
    yields an empty log. The search only takes the first admissible
    destination for each source, so it can miss solutions.
    """
    stats = stats if stats is not None else SearchStats()
    log = ActionLog()
    if board.is_solved():
        return log
    old_limit = sys.getrecursionlimit()
    needed = _depth_bound(board) + 100
    if needed > old_limit:
        sys.setrecursionlimit(needed)
    try:
        found = _search(board, log, 0, stats)
    finally:
        sys.setrecursionlimit(old_limit)
    if _debug_enabled():
        print(
            f"[solver] {'solved' if found else 'no solution'}: nodes={stats.nodes} "
            f"max_depth={stats.max_depth} reverts={stats.reverts} moves={len(log)}",
            file=sys.stderr,
        )
    return log if found else None


def format_solution(board: Board, log: ActionLog) -> str:
    """Solution report: the board, a blank line, then the numbered moves."""
    return board.format() + '\n\n' + ''.join(line + '\n' for line in log.format_lines())


def write_solution(board: Board, directory: Optional[str] = None) -> Optional[str]:
    """
    Solves `board` and writes the report next to its seed or source file name.
    The board is restored to its starting arrangement afterwards. Returns the
    written path, or None when no solution was found (nothing is written).
    """
    log = find_solution(board)
    if log is None:
        return None
    board.revert_all(log.duplicate())
    path = board.solution_filename()
    if directory:
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, os.path.basename(path))
    with open(path, 'w', encoding='utf-8') as fh:
        fh.write(format_solution(board, log))
    return path
