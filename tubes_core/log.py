from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from .tube import ColorChunk


class LogEmptyError(IndexError):
    """Raised when popping from an empty action log."""


@dataclass(frozen=True)
class Action:
    """A successful pour: 0-based tube indices plus the chunk that moved."""
    i_src: int
    i_dst: int
    chunk: ColorChunk


class ActionLog:
    """Stack of executed pours, newest last."""

    def __init__(self) -> None:
        self._actions: List[Action] = []

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def __repr__(self) -> str:
        return f'ActionLog({self._actions!r})'

    def push(self, action: Action) -> None:
        self._actions.append(action)

    def pop(self) -> Action:
        if not self._actions:
            raise LogEmptyError('action log is empty')
        return self._actions.pop()

    def duplicate(self) -> 'ActionLog':
        dup = ActionLog()
        dup._actions = list(self._actions)
        return dup

    def moves(self) -> List[tuple]:
        """1-based (source, destination) pairs in the order they were played."""
        return [(a.i_src + 1, a.i_dst + 1) for a in self._actions]

    def format_lines(self) -> List[str]:
        """Numbered report lines, e.g. ' 1:  3  5'."""
        width = len(str(len(self._actions) + 1))
        return [
            f"{i:>{width}}: {src:2d} {dst:2d}"
            for i, (src, dst) in enumerate(self.moves(), start=1)
        ]
