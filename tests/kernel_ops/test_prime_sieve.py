import itertools

import pytest

from kernels.cpu.ops import prime_sieve as ps
from optbench.errors import DomainViolation


def test_first_primes():
    assert list(itertools.islice(ps.primes_fast(1000), 5)) == [2, 3, 5, 7, 11]
    assert list(itertools.islice(ps.primes_naive(1000), 5)) == [2, 3, 5, 7, 11]


def test_edge_policy():
    for f in (ps.is_prime_naive, ps.is_prime_fast):
        assert not f(0)
        assert not f(1)
        assert f(2)
        assert f(3)
        assert not f(4)
        assert not f(9)
        assert not f(25)
        assert f(97)


@pytest.mark.parametrize("bound", [0, 1, 2, 3, 4, 10, 100, 2000])
def test_prime_sets_agree(bound):
    assert list(ps.primes_naive(bound)) == list(ps.primes_fast(bound))
    assert ps.baseline(bound) == ps.optimized(bound)


def test_default_bound_constants():
    tally = ps.optimized(ps.make_input())
    assert tally == ps.PrimeTally(count=9592, total=454396537)


def test_checksum_distinguishes_count_and_total():
    assert ps.checksum(ps.PrimeTally(2, 5)) != ps.checksum(ps.PrimeTally(3, 5))
    assert ps.checksum(ps.PrimeTally(2, 5)) != ps.checksum(ps.PrimeTally(2, 6))
    assert ps.checksum(ps.baseline(100)) == ps.checksum(ps.optimized(100))


def test_small_bounds():
    assert ps.optimized(2) == ps.PrimeTally(0, 0)
    assert ps.optimized(3) == ps.PrimeTally(1, 2)
    assert ps.optimized(10) == ps.PrimeTally(4, 17)


def test_negative_bound_is_rejected():
    with pytest.raises(DomainViolation):
        ps.optimized(-1)
    with pytest.raises(DomainViolation):
        ps.baseline(-5)
