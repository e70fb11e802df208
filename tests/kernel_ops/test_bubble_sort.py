from collections import Counter
from dataclasses import replace

import numpy as np
import pytest

from kernels.cpu.ops import bubble_sort
from optbench.errors import DomainError, DomainViolation


def _generated(n, seed=12345):
    return bubble_sort.make_input(bubble_sort.SPEC.resized(n, seed=seed))


@pytest.mark.parametrize("n", [0, 1, 2, 5, 8, 9, 257])
def test_both_variants_produce_sorted_permutation(n):
    x = _generated(n)
    b = bubble_sort.baseline(x.copy())
    o = bubble_sort.optimized(x.copy())
    for out in (b, o):
        assert bubble_sort.is_sorted(out)
        assert Counter(out.tolist()) == Counter(x.tolist())
    assert b.tolist() == o.tolist()
    assert bubble_sort.checksum(b) == bubble_sort.checksum(o)


def test_sorting_happens_in_place():
    x = _generated(50)
    work = x.copy()
    out = bubble_sort.optimized(work)
    assert out is work
    assert bubble_sort.is_sorted(work)


def test_duplicates_and_narrow_domains():
    spec = bubble_sort.SPEC.resized(12, value_bound=4)
    x = np.array([3, 0, 3, 1, 1, 2, 0, 3, 2, 2, 1, 0], dtype=np.int64)
    b = bubble_sort.baseline(x.copy(), spec)
    o = bubble_sort.optimized(x.copy(), spec)
    assert o.tolist() == [0, 0, 0, 1, 1, 1, 2, 2, 2, 3, 3, 3]
    assert b.tolist() == o.tolist()


def test_random_inputs_agree_with_numpy_sort():
    rng = np.random.default_rng(0)
    x = rng.integers(0, 32768, size=300, dtype=np.int64)
    o = bubble_sort.optimized(x.copy())
    assert o.tolist() == np.sort(x).tolist()


def test_checksum_weights_by_position():
    assert bubble_sort.checksum(np.array([1, 2, 3], dtype=np.int64)) == 1 * 1 + 2 * 2 + 3 * 3
    assert bubble_sort.checksum(np.array([], dtype=np.int64)) == 0


@pytest.mark.parametrize(
    "bad",
    [
        np.array([1, 32768, 2], dtype=np.int64),
        np.array([5, -1, 0], dtype=np.int64),
        np.array([1.5, 0.0, 2.0]),
        np.array([1.0, 0.0, 2.0]),
    ],
)
def test_values_outside_domain_are_rejected(bad):
    x = bad.copy()
    before = x.tolist()
    with pytest.raises(DomainViolation):
        bubble_sort.optimized(x)
    # Nothing written back on rejection.
    assert x.tolist() == before


def test_domain_error_alias():
    assert DomainError is DomainViolation


def test_domain_violation_names_the_passed_spec():
    spec = replace(bubble_sort.SPEC.resized(3, value_bound=4), name="bubble-sort-narrow")
    with pytest.raises(DomainViolation) as exc:
        bubble_sort.optimized(np.array([0, 4, 1], dtype=np.int64), spec)
    assert exc.value.kernel == "bubble-sort-narrow"
