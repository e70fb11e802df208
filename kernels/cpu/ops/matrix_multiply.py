"""
matrix-multiply: dense N x N product, row-major float64.

Baseline is the textbook i-j-k loop with one scalar accumulator per output
cell; every step of its inner loop strides down a column of B.

The optimized variant reorders to i-k-j. For a fixed (i, k) the inner loop
streams row k of B and row i of C sequentially, so it is expressed as a
fused multiply-add over fixed-width vector lanes:

    C[i, j:j+W] += A[i, k] * B[k, j:j+W]     for every full lane step
    C[i, j]     += A[i, k] * B[k, j]         for the last N % W columns

Changing the accumulation order changes rounding only; checksums agree within
the relative tolerance. numpy buffers need no explicit alignment here since
the lane operations work on arbitrary (unaligned) views.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from optbench.buffers import allocate
from optbench.errors import DomainViolation
from optbench.kernel import KernelPair
from optbench.lanes import VectorLanes
from optbench.spec import KernelSpec

SPEC = KernelSpec(
    name="matrix-multiply",
    input_shape="f64[N,N] x f64[N,N]",
    size=256,
    tolerance_kind="relative",
)

Operands = Tuple[np.ndarray, np.ndarray]


def make_input(spec: KernelSpec = SPEC) -> Operands:
    n = int(spec.size)
    a = allocate((n, n), np.float64)
    b = allocate((n, n), np.float64)
    idx = np.arange(n * n, dtype=np.int64)
    a.reshape(-1)[:] = (idx % 100) / 100.0
    b.reshape(-1)[:] = ((idx * 7) % 100) / 100.0
    return a, b


def _check_operands(operands: Operands, spec: KernelSpec) -> Tuple[np.ndarray, np.ndarray, int]:
    a, b = operands
    n = int(spec.size)
    for label, m in (("A", a), ("B", b)):
        if m.ndim != 2 or m.shape != (n, n):
            raise DomainViolation(spec.name, f"{label} has shape {m.shape}, expected ({n}, {n})", value=m.shape)
    return a, b, n


def baseline(operands: Operands, spec: KernelSpec = SPEC) -> np.ndarray:
    a, b, n = _check_operands(operands, spec)
    al = a.tolist()
    bl = b.tolist()
    c = allocate((n, n), np.float64)
    for i in range(n):
        row = al[i]
        for j in range(n):
            acc = 0.0
            for k in range(n):
                acc += row[k] * bl[k][j]
            c[i, j] = acc
    return c


def _resolve_lanes(spec: KernelSpec, lanes: Optional[VectorLanes]) -> VectorLanes:
    if lanes is not None:
        return lanes
    width = spec.param("lane_width")
    if width:
        return VectorLanes(int(width))
    return VectorLanes.for_dtype(np.float64)


def optimized(operands: Operands, spec: KernelSpec = SPEC, *, lanes: Optional[VectorLanes] = None) -> np.ndarray:
    a, b, n = _check_operands(operands, spec)
    vl = _resolve_lanes(spec, lanes)
    c = allocate((n, n), np.float64, zero=True)
    full, _ = vl.split(n)
    for i in range(n):
        c_row = c[i]
        c_lanes = vl.load(c_row, full)
        for k in range(n):
            a_ik = float(a[i, k])
            b_row = b[k]
            vl.fma(c_lanes, a_ik, vl.load(b_row, full))
            for j in range(full, n):
                c_row[j] += a_ik * b_row[j]
    return c


def checksum(c: np.ndarray) -> float:
    """Sum of every output cell in row-major order."""
    total = 0.0
    for v in c.reshape(-1).tolist():
        total += v
    return total


def lane_checksum(c: np.ndarray, spec: KernelSpec = SPEC, *, lanes: Optional[VectorLanes] = None) -> float:
    """
    Checksum via per-lane accumulators; the N*N % W tail is always included.

    The lane width resolves exactly as in `optimized`.
    """
    vl = _resolve_lanes(spec, lanes)
    return vl.hsum(c)


KERNEL = KernelPair(
    spec=SPEC,
    make_input=make_input,
    baseline=baseline,
    optimized=optimized,
    checksum=checksum,
    optimized_checksum=lane_checksum,
)


__all__ = ["SPEC", "make_input", "baseline", "optimized", "checksum", "lane_checksum", "KERNEL"]
