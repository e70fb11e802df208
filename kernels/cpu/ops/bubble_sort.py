"""
bubble-sort: comparison sort vs. counting sort.

Both variants sort in place. The counting sort is only valid for values in
[0, R); anything outside that range is rejected before the frequency table is
indexed.
"""

from __future__ import annotations

import numpy as np

from optbench.buffers import allocate
from optbench.errors import DomainViolation
from optbench.kernel import KernelPair
from optbench.lcg import high_bits_15, lcg_fill_batched
from optbench.spec import KernelSpec

SPEC = KernelSpec(
    name="bubble-sort",
    input_shape="i64[N] in [0, R)",
    size=10_000,
    seed=12345,
    tolerance_kind="exact",
    params={"value_bound": 32768},
)


def make_input(spec: KernelSpec = SPEC) -> np.ndarray:
    return lcg_fill_batched(int(spec.seed or 0), int(spec.size), high_bits_15, dtype=np.int64)


def baseline(values: np.ndarray, spec: KernelSpec = SPEC) -> np.ndarray:
    """Exchange sort, O(n^2) comparisons."""
    work = values.tolist()
    n = len(work)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if work[j] > work[j + 1]:
                work[j], work[j + 1] = work[j + 1], work[j]
    values[:] = work
    return values


def _check_domain(values: np.ndarray, bound: int, spec: KernelSpec) -> None:
    if values.dtype.kind not in "iu":
        raise DomainViolation(spec.name, f"counting sort needs integer values, got dtype {values.dtype}", value=str(values.dtype))
    if values.size == 0:
        return
    lo = int(values.min())
    hi = int(values.max())
    if lo < 0 or hi >= bound:
        bad = lo if lo < 0 else hi
        raise DomainViolation(spec.name, f"value {bad} outside counting-sort domain [0, {bound})", value=bad)


def optimized(values: np.ndarray, spec: KernelSpec = SPEC) -> np.ndarray:
    """Counting sort over [0, R): one tally pass, then ascending emission."""
    bound = int(spec.param("value_bound", 32768))
    _check_domain(values, bound, spec)
    counts = allocate((bound,), np.int64, zero=True)
    np.add.at(counts, values, 1)
    # Each value emitted `count` times, ascending; duplicates stay contiguous.
    values[:] = np.repeat(np.arange(bound, dtype=values.dtype), counts)
    return values


def checksum(values: np.ndarray) -> int:
    """Sum of value[i] * (i + 1) over the sorted sequence."""
    total = 0
    for i, v in enumerate(values.tolist()):
        total += v * (i + 1)
    return total


def is_sorted(values: np.ndarray) -> bool:
    return bool(values.size < 2 or np.all(values[:-1] <= values[1:]))


KERNEL = KernelPair(
    spec=SPEC,
    make_input=make_input,
    baseline=baseline,
    optimized=optimized,
    checksum=checksum,
    mutates_input=True,
)


__all__ = ["SPEC", "make_input", "baseline", "optimized", "checksum", "is_sorted", "KERNEL"]
