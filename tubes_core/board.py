from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from .log import Action, ActionLog, LogEmptyError
from .pool import ColorPool
from .tube import Tube, TubeFullError, pour_chunk, revert_chunk


class Board:
    """The full puzzle state: color tubes first, then `num_extra` auxiliary tubes."""

    def __init__(
        self,
        tubes: List[Tube],
        num_extra: int,
        seed: Optional[int] = None,
        filename: Optional[str] = None,
    ) -> None:
        if not tubes:
            raise ValueError('a board needs at least one tube')
        if len({t.num_slots for t in tubes}) != 1:
            raise ValueError('all tubes must have the same number of slots')
        if not 0 <= num_extra <= len(tubes):
            raise ValueError(f'invalid number of extra tubes: {num_extra}')
        self.tubes = tubes
        self.num_extra = num_extra
        self.seed = seed
        self.filename = filename

    @property
    def num_tubes(self) -> int:
        return len(self.tubes)

    @property
    def num_colors(self) -> int:
        return self.num_tubes - self.num_extra

    @property
    def num_slots(self) -> int:
        return self.tubes[0].num_slots

    @classmethod
    def generate(cls, num_colors: int, num_extra: int, num_slots: int, seed: int) -> 'Board':
        """Deals a random well-formed board; the same arguments always give the same board."""
        if num_colors < 1:
            raise ValueError(f'invalid number of colors: {num_colors}')
        if num_extra < 1:
            raise ValueError(f'invalid number of extra tubes: {num_extra}')
        if num_slots < 1:
            raise ValueError(f'invalid number of slots per tube: {num_slots}')
        rng = random.Random(seed)
        board = cls([Tube(num_slots) for _ in range(num_colors + num_extra)], num_extra, seed=seed)
        pool = ColorPool(num_colors, num_slots)
        while not pool.is_empty():
            color = pool.pick_color(rng)
            # Only color tubes are filled; the pool holds exactly enough units for them.
            while True:
                tube = board.tubes[rng.randrange(num_colors)]
                try:
                    tube.add_color(color)
                    break
                except TubeFullError:
                    continue
        return board

    @classmethod
    def from_slots(
        cls,
        num_tubes: int,
        num_colors: int,
        num_slots: int,
        values: Sequence[int],
        filename: Optional[str] = None,
    ) -> 'Board':
        """Builds a board from flattened row-major slot values (negative = empty).

        Unit counts are not checked here; run validate_slots first.
        """
        if len(values) != num_tubes * num_slots:
            raise ValueError(f'expected {num_tubes * num_slots} slot values, got {len(values)}')
        tubes = [
            Tube.from_colors(values[i * num_slots:(i + 1) * num_slots], num_slots)
            for i in range(num_tubes)
        ]
        return cls(tubes, num_tubes - num_colors, filename=filename)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[int]], num_extra: int, **kwargs) -> 'Board':
        rows = [list(r) for r in rows]
        if not rows:
            raise ValueError('a board needs at least one tube')
        num_slots = len(rows[0])
        return cls([Tube.from_colors(r, num_slots) for r in rows], num_extra, **kwargs)

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Slot colors of every tube, closed end first."""
        return tuple(t.colors() for t in self.tubes)

    def is_solved(self) -> bool:
        return all(t.is_pure() for t in self.tubes)

    def _in_range(self, i: int) -> bool:
        return 0 <= i < self.num_tubes

    def pour(self, i_src: int, i_dst: int, log: ActionLog) -> bool:
        """Pours tube `i_src` into tube `i_dst` (0-based) and logs it; False if illegal."""
        if not self._in_range(i_src) or not self._in_range(i_dst) or i_src == i_dst:
            return False
        chunk = pour_chunk(self.tubes[i_src], self.tubes[i_dst])
        if chunk is None:
            return False
        log.push(Action(i_src, i_dst, chunk))
        return True

    def revert_one(self, log: ActionLog) -> bool:
        """Undoes the newest logged pour; False when there is nothing to undo."""
        try:
            action = log.pop()
        except LogEmptyError:
            return False
        revert_chunk(self.tubes[action.i_src], self.tubes[action.i_dst], action.chunk)
        return True

    def revert_all(self, log: ActionLog) -> None:
        while self.revert_one(log):
            pass

    def pour_is_pointless(self, i_src: int, i_dst: int) -> bool:
        """A single-colored source poured into a pure destination never reduces disorder."""
        return self.tubes[i_src].is_single_colored() and self.tubes[i_dst].is_pure()

    def format(self) -> str:
        tube_width = len(str(self.num_tubes + 1))
        color_width = len(str(max(self.num_colors, 1))) + 1
        lines: List[str] = []
        for i, tube in enumerate(self.tubes, start=1):
            # hidden slots get one extra leading space
            cells = [
                f" {'?':>{color_width}}" if slot.hidden else f"{slot.color:>{color_width}}"
                for slot in tube.slots
            ]
            lines.append(f"{i:>{tube_width}}: " + ", ".join(cells))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f'Board(tubes={[list(c) for c in self.snapshot()]}, num_extra={self.num_extra})'

    def solution_filename(self) -> str:
        if self.filename is not None:
            return f'{self.filename}.solution'
        return f'seed{self.seed}.solution'
