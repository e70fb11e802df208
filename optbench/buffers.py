"""
Checked buffer allocation.

Every kernel buffer goes through `allocate` so that an allocation failure is
surfaced as `AllocationFailure` before the buffer is used, rather than as a
bare `MemoryError` somewhere in the middle of a kernel.

`OPTBENCH_MAX_ALLOC_MB` optionally caps a single request (0 or unset means no
cap). It exists so constrained hosts fail fast and predictably.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

import numpy as np

from optbench.errors import AllocationFailure

logger = logging.getLogger(__name__)


def _max_alloc_bytes() -> int:
    raw = os.getenv("OPTBENCH_MAX_ALLOC_MB", "0")
    try:
        mb = int(raw)
    except ValueError:
        logger.warning("ignoring invalid OPTBENCH_MAX_ALLOC_MB=%r", raw)
        return 0
    return max(0, mb) * 1024 * 1024


def allocate(shape: Sequence[int] | int, dtype=np.float64, *, zero: bool = False) -> np.ndarray:
    if isinstance(shape, (int, np.integer)):
        shape = (int(shape),)
    dims = tuple(int(d) for d in shape)
    dt = np.dtype(dtype)
    if any(d < 0 for d in dims):
        raise AllocationFailure(dims, str(dt), "negative dimension")
    nbytes = int(np.prod(dims, dtype=np.int64)) * dt.itemsize
    cap = _max_alloc_bytes()
    if cap and nbytes > cap:
        raise AllocationFailure(dims, str(dt), f"{nbytes} bytes exceeds cap of {cap} bytes")
    try:
        buf = np.zeros(dims, dtype=dt) if zero else np.empty(dims, dtype=dt)
    except (MemoryError, ValueError) as e:
        raise AllocationFailure(dims, str(dt), f"{type(e).__name__}: {e}") from e
    logger.debug("allocated %s %s (%d bytes)", dims, dt, nbytes)
    return buf


def owned_copy(buf):
    """Independent copy of a kernel input (arrays are copied through `allocate`)."""
    if isinstance(buf, np.ndarray):
        out = allocate(buf.shape, buf.dtype)
        out[...] = buf
        return out
    if isinstance(buf, tuple):
        return tuple(owned_copy(b) for b in buf)
    # bytes/int/str are immutable.
    return buf


__all__ = ["allocate", "owned_copy"]
