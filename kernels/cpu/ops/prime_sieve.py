"""
prime-sieve: count and sum the primes below a fixed bound by trial division.

The baseline tries every divisor in [2, n - 1]. The optimized test handles 2
on its own, rejects other even numbers, and tries odd divisors up to isqrt(n)
only; candidates after 2 are odd numbers only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from optbench.errors import DomainViolation
from optbench.kernel import KernelPair
from optbench.spec import KernelSpec

SPEC = KernelSpec(
    name="prime-sieve",
    input_shape="bound",
    size=100_000,
    tolerance_kind="exact",
)

# Checksum packs (total, count) into one int; lossless while count < 2**20.
_COUNT_BITS = 20


@dataclass(frozen=True)
class PrimeTally:
    count: int
    total: int


def is_prime_naive(n: int) -> bool:
    if n < 2:
        return False
    for d in range(2, n):
        if n % d == 0:
            return False
    return True


def is_prime_fast(n: int) -> bool:
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    for d in range(3, math.isqrt(n) + 1, 2):
        if n % d == 0:
            return False
    return True


def _check_bound(bound: int) -> int:
    if bound < 0:
        raise DomainViolation(SPEC.name, f"bound must be non-negative, got {bound}", value=bound)
    return bound


def primes_naive(bound: int) -> Iterator[int]:
    for n in range(2, _check_bound(bound)):
        if is_prime_naive(n):
            yield n


def primes_fast(bound: int) -> Iterator[int]:
    if _check_bound(bound) > 2:
        yield 2
    for n in range(3, bound, 2):
        if is_prime_fast(n):
            yield n


def _tally(primes: Iterator[int]) -> PrimeTally:
    count = 0
    total = 0
    for p in primes:
        count += 1
        total += p
    return PrimeTally(count=count, total=total)


def make_input(spec: KernelSpec = SPEC) -> int:
    return _check_bound(int(spec.size))


def baseline(bound: int, spec: KernelSpec = SPEC) -> PrimeTally:
    return _tally(primes_naive(int(bound)))


def optimized(bound: int, spec: KernelSpec = SPEC) -> PrimeTally:
    return _tally(primes_fast(int(bound)))


def checksum(out: PrimeTally) -> int:
    return (out.total << _COUNT_BITS) + out.count


KERNEL = KernelPair(
    spec=SPEC,
    make_input=make_input,
    baseline=baseline,
    optimized=optimized,
    checksum=checksum,
)


__all__ = [
    "SPEC",
    "PrimeTally",
    "is_prime_naive",
    "is_prime_fast",
    "primes_naive",
    "primes_fast",
    "make_input",
    "baseline",
    "optimized",
    "checksum",
    "KERNEL",
]
