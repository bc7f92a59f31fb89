from __future__ import annotations

import random
from typing import List


class ColorPool:
    """Remaining color units while a random board is being dealt."""

    def __init__(self, num_colors: int, num_slots: int) -> None:
        self.num_colors = num_colors
        self.num_slots = num_slots
        self.remaining: List[int] = [num_slots] * num_colors

    def is_empty(self) -> bool:
        return not any(self.remaining)

    def pick_color(self, rng: random.Random) -> int:
        """Draws a uniformly random color that still has units left and removes one unit."""
        if self.is_empty():
            raise ValueError('color pool is empty')
        while True:
            color = rng.randrange(self.num_colors)
            if self.remaining[color] > 0:
                break
        self.remaining[color] -= 1
        return color
