from __future__ import annotations

from typing import Callable, Optional, Tuple

from .board import Board
from .log import ActionLog

MOVE = 'move'
REVERT = 'revert'
QUIT = 'quit'
INVALID = 'invalid'

PROMPT = 'Src and dst tube: '


def parse_move(text: str) -> Tuple[str, Optional[int], Optional[int]]:
    """
    Parses one line of player input into (kind, src, dst) with 0-based indices.
    Punctuation and whitespace separate numbers; the first letter decides
    between quit ('q'), revert ('r') and invalid input.
    """
    chars = []
    for ch in text:
        if ch.isalpha():
            low = ch.lower()
            if low == 'q':
                return QUIT, None, None
            if low == 'r':
                return REVERT, None, None
            return INVALID, None, None
        chars.append(ch if ch.isdigit() else ' ')
    numbers = ''.join(chars).split()
    if len(numbers) < 2:
        return INVALID, None, None
    try:
        src, dst = int(numbers[0]), int(numbers[1])
    except ValueError:
        return INVALID, None, None
    return MOVE, src - 1, dst - 1


def play(
    board: Board,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    log: Optional[ActionLog] = None,
) -> bool:
    """Runs the interactive loop until quit, end of input, or a solved board. Returns True if solved."""
    log = log if log is not None else ActionLog()
    write(board.format())
    write('')
    while True:
        try:
            text = read_line(PROMPT)
        except EOFError:
            return False
        kind, src, dst = parse_move(text)
        if kind == QUIT:
            return False
        if kind == INVALID:
            continue
        if kind == MOVE:
            board.pour(src, dst, log)
        else:
            board.revert_one(log)
        write(board.format())
        write('')
        if board.is_solved():
            write('Conglaturation!')
            return True
