"""
Deterministic input generator.

Linear congruential recurrence (the classic ANSI C `rand` constants):

    state = (state * 1103515245 + 12345) mod 2**32

Each produced value derives from `state >> 16`. The recurrence is serial by
nature: the batched filler below unrolls the loop but still performs exactly
one state transition per element, in order.
"""

from __future__ import annotations

from typing import Callable, Iterator, List

import numpy as np

from optbench.buffers import allocate
from optbench.errors import DomainViolation

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0xFFFFFFFF

Derive = Callable[[int], int]


def next_state(state: int) -> int:
    return (state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK


def high_bits_15(state: int) -> int:
    """Value in [0, 32768): the sort kernel's derivation."""
    return (state >> 16) & 0x7FFF


def alphabet_index(size: int) -> Derive:
    """Return a derivation mapping a state to [0, size) via `(state >> 16) % size`."""
    if size <= 0:
        raise ValueError(f"alphabet size must be positive, got {size}")

    def _derive(state: int) -> int:
        return (state >> 16) % size

    return _derive


def lcg_stream(seed: int) -> Iterator[int]:
    """Yield successive states (the first yielded value is one step past `seed`)."""
    state = int(seed) & LCG_MASK
    while True:
        state = next_state(state)
        yield state


def lcg_values(seed: int, count: int, derive: Derive = high_bits_15) -> List[int]:
    if count < 0:
        raise DomainViolation("lcg", f"count must be non-negative, got {count}", value=count)
    out: List[int] = []
    state = int(seed) & LCG_MASK
    for _ in range(count):
        state = next_state(state)
        out.append(derive(state))
    return out


def lcg_fill_batched(
    seed: int,
    count: int,
    derive: Derive = high_bits_15,
    *,
    batch: int = 4,
    dtype=np.int64,
) -> np.ndarray:
    """
    Fill a preallocated array `batch` elements per step, with an exact tail.

    Produces the same values as `lcg_values(seed, count, derive)`.
    """
    if count < 0:
        raise DomainViolation("lcg", f"count must be non-negative, got {count}", value=count)
    if batch <= 0:
        raise ValueError(f"batch must be positive, got {batch}")
    out = allocate((count,), dtype)
    state = int(seed) & LCG_MASK
    full = count - count % batch
    i = 0
    while i < full:
        for lane in range(batch):
            state = next_state(state)
            out[i + lane] = derive(state)
        i += batch
    for j in range(full, count):
        state = next_state(state)
        out[j] = derive(state)
    return out


__all__ = [
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "LCG_MASK",
    "next_state",
    "high_bits_15",
    "alphabet_index",
    "lcg_stream",
    "lcg_values",
    "lcg_fill_batched",
]
