from __future__ import annotations

import argparse
import os
import sys
from typing import List, NoReturn, Optional

from .board import Board
from .play import play
from .reader import load_board
from .seed import fresh_seed
from .solver import write_solution
from .validate import BoardInputError

DEFAULT_COLORS = 5
DEFAULT_EXTRA = 2
DEFAULT_SLOTS = 4


def _fail(message: str) -> NoReturn:
    print(f'error: {message}', file=sys.stderr)
    raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='tubes', description='Generic "colour sorting game" (with solver).')
    parser.add_argument('-c', '--colors', type=int, default=DEFAULT_COLORS, help=f'Number of colors (default = {DEFAULT_COLORS})')
    parser.add_argument('-e', '--extra', type=int, default=DEFAULT_EXTRA, help=f'Number of extra tubes (default = {DEFAULT_EXTRA})')
    parser.add_argument('-l', '--slots', type=int, default=DEFAULT_SLOTS, help=f'Number of slots per tube (default = {DEFAULT_SLOTS})')
    parser.add_argument('-s', '--seed', type=int, default=None, help='Random seed for game (default = random)')
    parser.add_argument('-f', '--file', default=None, help='Read game from file instead of generating it from seed')
    parser.add_argument('-S', '--solve', action='store_true', help='Print solution to file')
    parser.add_argument('-N', '--noplay', action='store_true', help='Do not actually play game')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.colors < 1:
        _fail(f'Invalid number of colors: {args.colors}')
    if args.extra < 1:
        _fail(f'Invalid number of extra tubes: {args.extra}')
    if args.slots < 1:
        _fail(f'Invalid number of slots per tube: {args.slots}')
    if args.seed is not None and not 0 <= args.seed <= 0xFFFFFFFF:
        _fail(f'Invalid seed: {args.seed} (must be an unsigned 32-bit integer)')

    if args.file is None:
        seed = args.seed if args.seed is not None else fresh_seed()
        board = Board.generate(args.colors, args.extra, args.slots, seed)
    else:
        try:
            board = load_board(args.file)
        except BoardInputError as e:
            _fail(str(e))

    if args.solve:
        solution_dir = os.getenv('TUBES_SOLUTION_DIR') or None
        path = write_solution(board, solution_dir)
        if path is None:
            print('No solution found; nothing written.')
        else:
            print(f'Solution written to {path}')

    if not args.noplay:
        play(board)
