from __future__ import annotations

from itertools import groupby
from typing import Sequence

from .tube import EMPTY


class BoardInputError(ValueError):
    """Base class for malformed board input (files or request bodies)."""


class BoardValidationError(BoardInputError):
    """Slot data does not describe a well-formed board."""


def validate_slots(values: Sequence[int], num_tubes: int, num_slots: int) -> int:
    """
    Checks flattened per-tube slot values (negative = empty) and returns the
    number of colors. Empty slots must fill a whole, non-zero number of tubes
    and every color must appear exactly `num_slots` times.
    """
    if num_tubes < 1 or num_slots < 1:
        raise BoardValidationError(f'board has no slots ({num_tubes} tubes of {num_slots})')
    expected_total = num_tubes * num_slots
    if len(values) != expected_total:
        raise BoardValidationError(
            f'expected {expected_total} slot values for {num_tubes} tubes of {num_slots}, got {len(values)}'
        )
    ordered = sorted(EMPTY if v < 0 else v for v in values)
    num_empty = 0
    while num_empty < len(ordered) and ordered[num_empty] == EMPTY:
        num_empty += 1
    if num_empty == 0:
        raise BoardValidationError('board has no empty slots (at least one extra tube is required)')
    if num_empty % num_slots != 0:
        raise BoardValidationError(
            f'number of empty slots ({num_empty}) is not a multiple of the tube size ({num_slots})'
        )
    num_extra = num_empty // num_slots
    for color, run in groupby(ordered[num_empty:]):
        count = sum(1 for _ in run)
        if count != num_slots:
            raise BoardValidationError(f'color {color} appears {count} times, expected {num_slots}')
    return num_tubes - num_extra
