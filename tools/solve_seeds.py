from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Optional

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import Board, SearchStats, find_solution  # type: ignore


def process(args: argparse.Namespace) -> None:
    """Generates boards for a range of seeds and reports how often the solver succeeds."""
    stride = max(1, int(args.stride))
    offset = max(0, int(args.offset))
    start_time = time.time()
    processed = 0
    solved = 0
    total_moves = 0
    unsolved: List[int] = []

    for seed in range(args.first, args.first + args.count):
        if (seed % stride) != offset:
            continue
        board = Board.generate(args.colors, args.extra, args.slots, seed)
        stats = SearchStats()
        log = find_solution(board, stats)
        processed += 1
        if log is None:
            unsolved.append(seed)
        else:
            solved += 1
            total_moves += len(log)
        if args.verbose:
            outcome = f"{len(log)} moves" if log is not None else "no solution"
            print(f"seed={seed} {outcome} nodes={stats.nodes} max_depth={stats.max_depth}")

    elapsed = time.time() - start_time
    avg: Optional[float] = (total_moves / solved) if solved else None
    avg_s = f"{avg:.1f}" if avg is not None else "-"
    print(f"Processed={processed} solved={solved} unsolved={len(unsolved)} avg_moves={avg_s} elapsed_sec={elapsed:.1f}")
    if unsolved and args.verbose:
        print("Unsolved seeds:", " ".join(str(s) for s in unsolved))


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the backtracking solver over a range of generated boards")
    parser.add_argument('--colors', type=int, default=5, help='Number of colors (default 5)')
    parser.add_argument('--extra', type=int, default=2, help='Number of extra tubes (default 2)')
    parser.add_argument('--slots', type=int, default=4, help='Slots per tube (default 4)')
    parser.add_argument('--first', type=int, default=0, help='First seed (default 0)')
    parser.add_argument('--count', type=int, default=100, help='Number of seeds (default 100)')
    parser.add_argument('--stride', type=int, default=1, help='Shard stride for parallel runs (default 1)')
    parser.add_argument('--offset', type=int, default=0, help='Shard offset [0..stride-1] for parallel runs')
    parser.add_argument('--verbose', action='store_true', help='Print one line per seed')
    args = parser.parse_args()
    process(args)


if __name__ == '__main__':
    main()
