"""
Case generation for kernel equivalence checks.

Cases are split by contract boundary:

- `in_contract`: inputs every optimization must accept; used for the
  baseline == optimized gate. Sizes include the small edge values that
  exercise remainder handling (not multiples of the lane width, worker count
  or unroll factor) and are capped per kernel so the slow baselines stay cheap.
- `out_of_contract`: inputs that violate exactly one domain assumption
  (counting-sort range, int64 Fibonacci range, matrix order, empty pattern,
  negative bound); used only to check that the violation is reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from optbench.spec import KernelSpec


@dataclass
class TestCase:
    size: int
    seed: Optional[int] = None
    # Explicit input; when set it replaces the kernel's generated input.
    inputs: Any = None
    note: str = ""
    __test__ = False  # prevent pytest from treating this as a test container

    def spec_for(self, spec: KernelSpec) -> KernelSpec:
        return spec.resized(self.size, seed=self.seed)


@dataclass
class GeneratedCases:
    in_contract: List[TestCase] = field(default_factory=list)
    out_of_contract: List[TestCase] = field(default_factory=list)


EDGE_SIZES = [0, 1, 2, 3, 4, 5, 7, 8, 9, 15, 16, 17, 31, 32, 33]

# Largest generated size per kernel; keeps O(n^2) / O(n^3) / exponential
# baselines in the sub-second range.
CASE_SIZE_CAPS: Dict[str, int] = {
    "array-sum": 1 << 20,
    "bubble-sort": 400,
    "fibonacci": 24,
    "matrix-multiply": 24,
    "prime-sieve": 3000,
    "string-search": 50_000,
}


def _sizes(spec: KernelSpec, cap: int, extra_sizes: Sequence[int] | None) -> List[int]:
    vals = {v for v in EDGE_SIZES if v <= cap}
    vals.add(cap)
    for v in extra_sizes or []:
        if 0 <= int(v) <= cap:
            vals.add(int(v))
    return sorted(vals)


def _planted_cases(spec: KernelSpec) -> List[TestCase]:
    if spec.name != "string-search":
        return []
    pattern = str(spec.param("pattern", "ABCDABD")).encode("ascii")
    return [
        TestCase(size=len(pattern), inputs=(pattern, pattern), note="single occurrence"),
        TestCase(size=3 * len(pattern), inputs=(pattern * 3, pattern), note="back-to-back copies"),
        TestCase(size=6, inputs=(b"AAAAAA", b"AAA"), note="self-overlapping pattern"),
        TestCase(size=3, inputs=(b"ABC", pattern), note="text shorter than pattern"),
    ]


def generate_cases(
    spec: KernelSpec,
    *,
    limit: int = 10,
    seed: Optional[int] = None,
    cap: Optional[int] = None,
    extra_sizes: Sequence[int] | None = None,
) -> List[TestCase]:
    """
    Deterministic in-contract cases: planted inputs first, then sizes from
    largest to smallest (the capped size is the most informative), truncated
    to `limit`.
    """
    size_cap = min(int(spec.size), int(cap if cap is not None else CASE_SIZE_CAPS.get(spec.name, spec.size)))
    case_seed = spec.seed if seed is None else int(seed)
    cases = list(_planted_cases(spec))
    for n in reversed(_sizes(spec, size_cap, extra_sizes)):
        cases.append(TestCase(size=n, seed=case_seed))
    return cases[: max(0, int(limit))]


def _violations(spec: KernelSpec) -> List[TestCase]:
    name = spec.name
    if name == "bubble-sort":
        bound = int(spec.param("value_bound", 32768))
        return [
            TestCase(size=4, inputs=np.array([3, bound, 1, 0], dtype=np.int64), note="value == R"),
            TestCase(size=3, inputs=np.array([2, -1, 5], dtype=np.int64), note="negative value"),
        ]
    if name == "fibonacci":
        from kernels.cpu.ops.fibonacci import FIB_MAX_N

        return [TestCase(size=FIB_MAX_N + 2, inputs=FIB_MAX_N + 2, note="fib(93) overflows int64")]
    if name == "matrix-multiply":
        n = min(int(spec.size), 8)
        wrong = np.zeros((n + 1, n + 1), dtype=np.float64)
        return [TestCase(size=n, inputs=(wrong, wrong), note="operand order != N")]
    if name == "prime-sieve":
        return [TestCase(size=0, inputs=-1, note="negative bound")]
    if name == "string-search":
        return [TestCase(size=16, inputs=(b"ABCDABDABCDABDAB", b""), note="empty pattern")]
    return []


def generate_cases_split(spec: KernelSpec, *, limit: int = 10, seed: Optional[int] = None, cap: Optional[int] = None) -> GeneratedCases:
    return GeneratedCases(
        in_contract=generate_cases(spec, limit=limit, seed=seed, cap=cap),
        out_of_contract=_violations(spec),
    )


__all__ = ["TestCase", "GeneratedCases", "EDGE_SIZES", "CASE_SIZE_CAPS", "generate_cases", "generate_cases_split"]
