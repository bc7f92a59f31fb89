from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

EMPTY = -1  # color value of an empty slot


class TubeFullError(Exception):
    """Raised when a color is added to a tube without a free slot."""


@dataclass
class Slot:
    """One position in a tube. Hidden slots are rendered as '?'."""
    color: int = EMPTY
    hidden: bool = False


@dataclass(frozen=True)
class ColorChunk:
    """Maximal run of one color at the open end of a tube."""
    color: int
    count: int


class Tube:
    """Fixed-capacity column of slots, filled from index 0 (closed end) upwards.

    The last index is the open end; pours only ever touch slots from there.
    """

    def __init__(self, num_slots: int) -> None:
        if num_slots < 1:
            raise ValueError(f'a tube needs at least one slot, got {num_slots}')
        self.num_slots = num_slots
        self.slots: List[Slot] = [Slot() for _ in range(num_slots)]

    @classmethod
    def from_colors(cls, colors: Iterable[int], num_slots: Optional[int] = None) -> 'Tube':
        """Builds a tube by adding each non-negative color in order."""
        colors = list(colors)
        tube = cls(num_slots if num_slots is not None else len(colors))
        for color in colors:
            if color >= 0:
                tube.add_color(color)
        return tube

    def colors(self) -> Tuple[int, ...]:
        return tuple(slot.color for slot in self.slots)

    def __repr__(self) -> str:
        return f'Tube({list(self.colors())})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tube):
            return NotImplemented
        return self.colors() == other.colors()

    def clear(self) -> None:
        for slot in self.slots:
            slot.color = EMPTY
            slot.hidden = False

    def is_empty(self) -> bool:
        return all(slot.color == EMPTY for slot in self.slots)

    def is_full(self) -> bool:
        return all(slot.color != EMPTY for slot in self.slots)

    def free_slots(self) -> int:
        return sum(1 for slot in self.slots if slot.color == EMPTY)

    def is_pure(self) -> bool:
        """All slots hold the same value; an all-empty tube counts as pure."""
        first = self.slots[0].color
        return all(slot.color == first for slot in self.slots)

    def is_single_colored(self) -> bool:
        """All non-empty slots share one color (empty slots are ignored)."""
        seen = {slot.color for slot in self.slots if slot.color != EMPTY}
        return len(seen) <= 1

    def add_color(self, color: int) -> None:
        """Fills the first empty slot from the closed end (setup only, never during play)."""
        for slot in self.slots:
            if slot.color == EMPTY:
                slot.color = color
                return
        raise TubeFullError(f'no free slot for color {color}')

    def _top_index(self) -> int:
        """Index of the outermost non-empty slot, or -1 for an empty tube."""
        i = self.num_slots - 1
        while i >= 0 and self.slots[i].color == EMPTY:
            i -= 1
        return i

    def top_chunk(self) -> ColorChunk:
        i = self._top_index()
        if i < 0:
            return ColorChunk(EMPTY, 0)
        color = self.slots[i].color
        count = 0
        while i >= 0 and self.slots[i].color == color:
            count += 1
            i -= 1
        return ColorChunk(color, count)

    def _push_chunk(self, chunk: ColorChunk, check: bool = True) -> bool:
        top = self._top_index()
        if check:
            free = self.num_slots - 1 - top
            if top >= 0 and self.slots[top].color != chunk.color:
                return False
            if chunk.count > free:
                return False
        for i in range(top + 1, top + 1 + chunk.count):
            self.slots[i].color = chunk.color
        return True

    def _pop_chunk(self, chunk: ColorChunk) -> None:
        i = self._top_index()
        removed = 0
        while i >= 0 and removed < chunk.count and self.slots[i].color == chunk.color:
            self.slots[i].color = EMPTY
            removed += 1
            i -= 1


def pour_chunk(src: Tube, dst: Tube) -> Optional[ColorChunk]:
    """Moves the top chunk of `src` onto `dst`.

    Returns the moved chunk, or None when the pour is illegal, in which case
    neither tube is touched.
    """
    if src.is_empty() or dst.is_full():
        return None
    chunk = src.top_chunk()
    if not dst._push_chunk(chunk):
        return None
    src._pop_chunk(chunk)
    return chunk


def revert_chunk(src: Tube, dst: Tube, chunk: ColorChunk) -> None:
    """Undoes a pour of `chunk` from `src` to `dst` without legality checks."""
    dst._pop_chunk(chunk)
    src._push_chunk(chunk, check=False)
