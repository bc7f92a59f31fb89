from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .board import Board
from .validate import BoardInputError, BoardValidationError, validate_slots


class BoardFileNotFoundError(BoardInputError):
    def __init__(self, filename: str) -> None:
        super().__init__(f"Cannot open file '{filename}'!")
        self.filename = filename


class BoardParseError(BoardInputError):
    def __init__(self, filename: str, line: int, detail: str = '') -> None:
        msg = f"Error reading file '{filename}' at line {line}!"
        if detail:
            msg += f' ({detail})'
        super().__init__(msg)
        self.filename = filename
        self.line = line


class InconsistentRowError(BoardInputError):
    def __init__(self, filename: str, line: int, expected: int, actual: int) -> None:
        super().__init__(
            f"Invalid number of arguments in file '{filename}' at line {line}! Expected {expected} got {actual}!"
        )
        self.filename = filename
        self.line = line
        self.expected = expected
        self.actual = actual


@dataclass(frozen=True)
class RawBoard:
    """Parsed and validated board file contents."""
    num_tubes: int
    num_colors: int
    num_slots: int
    values: Tuple[int, ...]  # row-major, negative values already mapped to -1


def _parse_line(text: str) -> Optional[List[int]]:
    """
    Parses one line into integers. Returns None for blank or comment-only lines.
    Raises ValueError when the line holds anything but numbers and separators.
    """
    data = text.split('#', 1)[0]
    if any(ch.isalpha() for ch in data):
        raise ValueError('unexpected letters')
    cleaned = ''.join(ch if (ch.isdigit() or ch == '-') else ' ' for ch in data)
    tokens = cleaned.split()
    if not tokens:
        return None
    return [int(tok) for tok in tokens]


def parse_board_lines(lines: Iterable[Union[str, bytes]], filename: str = '<input>') -> RawBoard:
    """Turns board text (one tube per line) into a validated RawBoard. Byte lines are decoded as UTF-8."""
    rows: List[List[int]] = []
    expected: Optional[int] = None
    for lineno, text in enumerate(lines, start=1):
        try:
            if isinstance(text, bytes):
                text = text.decode('utf-8')
            row = _parse_line(text)
        except ValueError as e:
            raise BoardParseError(filename, lineno, str(e)) from e
        if row is None:
            continue
        if expected is None:
            expected = len(row)
        elif len(row) != expected:
            raise InconsistentRowError(filename, lineno, expected, len(row))
        rows.append(row)

    num_slots = expected or 0
    num_tubes = len(rows)
    values = tuple(-1 if v < 0 else v for row in rows for v in row)
    try:
        num_colors = validate_slots(values, num_tubes, num_slots)
    except BoardValidationError as e:
        raise BoardValidationError(f"Input file '{filename}' failed sanity check: {e}") from e
    return RawBoard(num_tubes=num_tubes, num_colors=num_colors, num_slots=num_slots, values=values)


def read_board_file(path: str) -> RawBoard:
    if not os.path.isfile(path):
        raise BoardFileNotFoundError(path)
    try:
        with open(path, 'rb') as fh:
            return parse_board_lines(fh, filename=path)
    except OSError as e:
        raise BoardFileNotFoundError(path) from e


def load_board(path: str) -> Board:
    """Reads, validates and builds a board from a text file."""
    raw = read_board_file(path)
    return Board.from_slots(raw.num_tubes, raw.num_colors, raw.num_slots, raw.values, filename=path)
