"""
Checksum tolerances for baseline-vs-optimized verification.

Integer checksums (sort, fibonacci, primes, search) must match exactly.
Floating checksums are sums, and an optimized variant is allowed to reorder
them (parallel partial sums, vector lanes). Reassociating an n-term sum moves
the result by at most about log2(n) * eps relative to its magnitude for the
well-conditioned, positive inputs used here, so the relative tolerance is that
bound, floored at 1e-9.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from optbench.spec import KernelSpec


@dataclass(frozen=True)
class Tolerances:
    atol: float
    rtol: float

    @property
    def exact(self) -> bool:
        return self.atol == 0.0 and self.rtol == 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"atol": float(self.atol), "rtol": float(self.rtol)}


EXACT = Tolerances(0.0, 0.0)

# Floor for floating checksums.
FLOAT_RTOL = 1e-9

# Safety factor on the log2(n) * eps reassociation bound.
_REASSOC_FACTOR = 4.0


def reassociation_rtol(n_terms: int) -> float:
    if n_terms <= 1:
        return 0.0
    eps = float(np.finfo(np.float64).eps)
    return _REASSOC_FACTOR * math.ceil(math.log2(n_terms)) * eps


def _terms(spec: KernelSpec) -> int:
    # Matrix checksums add N*N cells, each itself an N-term dot product.
    if spec.name == "matrix-multiply":
        return int(spec.size) ** 3
    return int(spec.size)


def infer_tolerances(spec: KernelSpec, *, n_terms: Optional[int] = None) -> Tolerances:
    if spec.is_exact:
        return EXACT
    n = _terms(spec) if n_terms is None else int(n_terms)
    return Tolerances(atol=0.0, rtol=max(FLOAT_RTOL, reassociation_rtol(n)))


def compare_checksums(baseline: Any, optimized: Any, tol: Tolerances) -> Tuple[bool, float, float]:
    """
    Return (ok, abs_err, rel_err).

    Exact tolerances compare with `==` (Python ints never lose precision).
    Non-finite floats only match an identical non-finite value.
    """
    if tol.exact and not (isinstance(baseline, float) or isinstance(optimized, float)):
        ok = baseline == optimized
        if ok:
            return True, 0.0, 0.0
        try:
            abs_err = float(abs(baseline - optimized))
            rel_err = abs_err / max(abs(float(baseline)), 1e-300)
        except TypeError:
            abs_err = rel_err = float("inf")
        return False, abs_err, rel_err
    b = float(baseline)
    o = float(optimized)
    if not (math.isfinite(b) and math.isfinite(o)):
        same = (b == o) or (math.isnan(b) and math.isnan(o))
        return same, (0.0 if same else float("inf")), (0.0 if same else float("inf"))
    abs_err = abs(b - o)
    rel_err = abs_err / abs(b) if b != 0.0 else (0.0 if abs_err == 0.0 else float("inf"))
    ok = abs_err <= tol.atol + tol.rtol * abs(b)
    return ok, abs_err, rel_err


__all__ = ["Tolerances", "EXACT", "FLOAT_RTOL", "reassociation_rtol", "infer_tolerances", "compare_checksums"]
