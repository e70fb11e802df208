"""
Fork-join worker pool with static partitioning.

Index ranges are split into contiguous, disjoint blocks up front. Workers
share no mutable state; results are gathered after every worker finishes
and returned in block order, so combining them is deterministic for a given
(N, workers) pair.
"""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, List, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Block = Tuple[int, int]


def partition(n: int, workers: int) -> List[Block]:
    """
    Split [0, n) into at most `workers` contiguous blocks.

    The first `n % p` blocks are one element longer. Empty ranges produce no
    blocks, and `workers` is clamped to `n`.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if n == 0:
        return []
    p = min(int(workers), int(n))
    base, extra = divmod(n, p)
    blocks: List[Block] = []
    start = 0
    for w in range(p):
        stop = start + base + (1 if w < extra else 0)
        blocks.append((start, stop))
        start = stop
    return blocks


def fork_join(fn: Callable[[int, int], T], blocks: Sequence[Block]) -> List[T]:
    """Run `fn(start, stop)` for every block on its own worker; results in block order."""
    if not blocks:
        return []
    if len(blocks) == 1:
        start, stop = blocks[0]
        return [fn(start, stop)]
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(blocks)) as pool:
        futures = [pool.submit(fn, start, stop) for start, stop in blocks]
        # Join: .result() re-raises a worker's exception in the caller.
        results = [f.result() for f in futures]
    logger.debug("fork_join: %d blocks joined", len(blocks))
    return results


__all__ = ["Block", "partition", "fork_join"]
