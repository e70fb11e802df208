"""
array-sum: streaming floating-point reduction.

Input is the harmonic sequence `x[i] = 1.0 / (i + 1)`. The baseline adds
strictly left to right; the optimized variant reduces contiguous blocks on
independent workers and combines the partial sums in worker order, which
changes association (and therefore rounding) but not the value.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from optbench.buffers import allocate
from optbench.errors import DomainViolation
from optbench.hardware_profile import default_workers
from optbench.kernel import KernelPair
from optbench.spec import KernelSpec
from optbench.workers import fork_join, partition

SPEC = KernelSpec(
    name="array-sum",
    input_shape="f64[N]",
    size=100_000_000,
    tolerance_kind="relative",
    params={"chunk": 1 << 20},
)


def _chunk(spec: KernelSpec) -> int:
    chunk = int(spec.param("chunk", 1 << 20))
    if chunk < 1:
        raise DomainViolation(spec.name, f"chunk must be >= 1, got {chunk}", value=chunk)
    return chunk


def make_input(spec: KernelSpec = SPEC) -> np.ndarray:
    n = int(spec.size)
    chunk = _chunk(spec)
    x = allocate((n,), np.float64)
    for start in range(0, n, chunk):
        stop = min(n, start + chunk)
        np.divide(1.0, np.arange(start + 1, stop + 1, dtype=np.float64), out=x[start:stop])
    return x


def baseline(x: np.ndarray, spec: KernelSpec = SPEC) -> float:
    """
    Sequential sum: ((x0 + x1) + x2) + ...

    Runs as a chunked running sum with the carry prepended to each chunk, so
    the association order is exactly that of a single scalar loop.
    """
    n = int(x.shape[0])
    if n == 0:
        return 0.0
    chunk = _chunk(spec)
    scratch = allocate((min(n, chunk) + 1,), np.float64)
    carry = 0.0
    for start in range(0, n, chunk):
        block = x[start : start + chunk]
        m = int(block.shape[0])
        scratch[0] = carry
        scratch[1 : m + 1] = block
        np.add.accumulate(scratch[: m + 1], out=scratch[: m + 1])
        carry = float(scratch[m])
    return carry


def optimized(x: np.ndarray, spec: KernelSpec = SPEC, *, workers: Optional[int] = None) -> float:
    n = int(x.shape[0])
    if n == 0:
        return 0.0
    p = int(workers or spec.param("workers") or default_workers())
    blocks = partition(n, p)

    def _partial(start: int, stop: int) -> float:
        return float(np.add.reduce(x[start:stop]))

    total = 0.0
    for part in fork_join(_partial, blocks):
        total += part
    return total


def checksum(out: float) -> float:
    return float(out)


KERNEL = KernelPair(
    spec=SPEC,
    make_input=make_input,
    baseline=baseline,
    optimized=optimized,
    checksum=checksum,
)


__all__ = ["SPEC", "make_input", "baseline", "optimized", "checksum", "KERNEL"]
