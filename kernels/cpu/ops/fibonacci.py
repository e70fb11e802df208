"""
fibonacci: naive double recursion vs. a two-variable rolling loop.

The kernel output is the sum of Fibonacci(i) for i in [0, n_terms). Values are
compared as signed 64-bit integers, so the valid domain stops at n = 92:
Fibonacci(93) = 12200160415121876738 exceeds 2**63 - 1.
"""

from __future__ import annotations

from optbench.errors import DomainViolation
from optbench.kernel import KernelPair
from optbench.spec import KernelSpec

# Largest n whose Fibonacci number fits a signed 64-bit integer.
FIB_MAX_N = 92

SPEC = KernelSpec(
    name="fibonacci",
    input_shape="n_terms",
    size=40,
    tolerance_kind="exact",
)


def _check_n(n: int, spec: KernelSpec = SPEC) -> None:
    if n < 0 or n > FIB_MAX_N:
        raise DomainViolation(spec.name, f"n={n} outside [0, {FIB_MAX_N}] (int64 overflow)", value=n)


def fib_recursive(n: int) -> int:
    if n <= 1:
        return n
    return fib_recursive(n - 1) + fib_recursive(n - 2)


def fib_iterative(n: int) -> int:
    if n <= 1:
        return n
    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, a + b
    return b


def _check_terms(n_terms: int, spec: KernelSpec) -> None:
    if n_terms < 0:
        raise DomainViolation(spec.name, f"negative term count {n_terms}", value=n_terms)
    if n_terms > 0:
        _check_n(n_terms - 1, spec)


def make_input(spec: KernelSpec = SPEC) -> int:
    n_terms = int(spec.size)
    _check_terms(n_terms, spec)
    return n_terms


def _sum_terms(n_terms: int, fib, spec: KernelSpec) -> int:
    _check_terms(n_terms, spec)
    total = 0
    for i in range(n_terms):
        total += fib(i)
    return total


def baseline(n_terms: int, spec: KernelSpec = SPEC) -> int:
    return _sum_terms(int(n_terms), fib_recursive, spec)


def optimized(n_terms: int, spec: KernelSpec = SPEC) -> int:
    return _sum_terms(int(n_terms), fib_iterative, spec)


def checksum(out: int) -> int:
    return int(out)


KERNEL = KernelPair(
    spec=SPEC,
    make_input=make_input,
    baseline=baseline,
    optimized=optimized,
    checksum=checksum,
)


__all__ = [
    "FIB_MAX_N",
    "SPEC",
    "fib_recursive",
    "fib_iterative",
    "make_input",
    "baseline",
    "optimized",
    "checksum",
    "KERNEL",
]
