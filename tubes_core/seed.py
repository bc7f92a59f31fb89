from __future__ import annotations

import random
import time


def fresh_seed() -> int:
    """Derives an unsigned 32-bit seed from wall-clock and CPU-clock entropy."""
    hash1 = random.Random(time.time_ns()).getrandbits(31)
    hash2 = random.Random(time.process_time_ns()).getrandbits(31)
    hash1 += 0x9e3779b9 + (hash2 << 6) + (hash2 >> 2)
    return (hash2 ^ hash1) & 0xFFFFFFFF
