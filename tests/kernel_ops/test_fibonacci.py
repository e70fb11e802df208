import pytest

from kernels.cpu.ops import fibonacci
from optbench.errors import DomainViolation


def test_first_values():
    expected = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55]
    assert [fibonacci.fib_recursive(i) for i in range(11)] == expected
    assert [fibonacci.fib_iterative(i) for i in range(11)] == expected


def test_running_sums():
    assert fibonacci.baseline(10) == 88
    assert fibonacci.optimized(10) == 88
    assert fibonacci.baseline(11) == 143
    assert fibonacci.optimized(11) == 143


@pytest.mark.parametrize("n_terms", [0, 1, 2, 3, 17, 25])
def test_variants_agree(n_terms):
    assert fibonacci.baseline(n_terms) == fibonacci.optimized(n_terms)


def test_int64_boundary():
    assert fibonacci.fib_iterative(fibonacci.FIB_MAX_N) == 7540113804746346429
    assert fibonacci.fib_iterative(fibonacci.FIB_MAX_N) < 2**63
    assert fibonacci.fib_iterative(fibonacci.FIB_MAX_N + 1) >= 2**63
    # Largest accepted kernel input: terms 0..92.
    assert fibonacci.optimized(fibonacci.FIB_MAX_N + 1) == fibonacci.fib_iterative(fibonacci.FIB_MAX_N + 2) - 1


def test_overflowing_terms_are_rejected():
    with pytest.raises(DomainViolation):
        fibonacci.optimized(fibonacci.FIB_MAX_N + 2)
    with pytest.raises(DomainViolation):
        fibonacci.baseline(fibonacci.FIB_MAX_N + 2)
    with pytest.raises(DomainViolation):
        fibonacci.make_input(fibonacci.SPEC.resized(200))


def test_default_size_is_forty_terms():
    assert fibonacci.make_input() == 40
    assert fibonacci.optimized(40) == 165580140


@pytest.mark.parametrize("n_terms", [-1, -5])
def test_negative_term_counts_are_rejected(n_terms):
    with pytest.raises(DomainViolation):
        fibonacci.optimized(n_terms)
    with pytest.raises(DomainViolation):
        fibonacci.baseline(n_terms)
