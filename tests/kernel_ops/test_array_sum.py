import numpy as np
import pytest

from kernels.cpu.ops import array_sum
from optbench.errors import DomainViolation
from verify.tolerances import compare_checksums, infer_tolerances


def _spec(n, **params):
    return array_sum.SPEC.resized(n, **params)


def _loop_sum(x):
    total = 0.0
    for v in x.tolist():
        total += v
    return total


def test_input_is_harmonic_sequence():
    x = array_sum.make_input(_spec(10, chunk=3))
    assert x.dtype == np.float64
    assert x[0] == 1.0
    assert x[3] == 0.25
    assert x[9] == 1.0 / 10


@pytest.mark.parametrize("chunk", [1, 7, 64, 1 << 20])
def test_baseline_is_strictly_left_to_right(chunk):
    spec = _spec(1000, chunk=chunk)
    x = array_sum.make_input(spec)
    assert array_sum.baseline(x, spec) == _loop_sum(x)


@pytest.mark.parametrize("workers", [1, 2, 3, 7, 64])
@pytest.mark.parametrize("n", [1, 2, 13, 1000, 100_003])
def test_optimized_matches_baseline_within_tolerance(n, workers):
    spec = _spec(n)
    x = array_sum.make_input(spec)
    b = array_sum.baseline(x, spec)
    o = array_sum.optimized(x, spec, workers=workers)
    ok, _, rel = compare_checksums(b, o, infer_tolerances(spec))
    assert ok, rel


def test_optimized_is_bit_identical_across_runs():
    spec = _spec(50_001)
    x = array_sum.make_input(spec)
    runs = {array_sum.optimized(x, spec, workers=4) for _ in range(5)}
    assert len(runs) == 1


def test_partials_combine_in_worker_order():
    spec = _spec(10)
    x = array_sum.make_input(spec)
    expected = 0.0
    for start, stop in [(0, 4), (4, 7), (7, 10)]:
        expected += float(np.add.reduce(x[start:stop]))
    assert array_sum.optimized(x, spec, workers=3) == expected


def test_empty_input_spawns_no_worker(monkeypatch):
    def _boom(*args, **kwargs):
        raise AssertionError("worker spawned for empty input")

    monkeypatch.setattr(array_sum, "fork_join", _boom)
    x = array_sum.make_input(_spec(0))
    assert array_sum.baseline(x) == 0.0
    assert array_sum.optimized(x, workers=4) == 0.0


def test_default_worker_count_comes_from_environment(monkeypatch):
    seen = []
    real = array_sum.partition

    def _spy(n, p):
        seen.append(p)
        return real(n, p)

    monkeypatch.setattr(array_sum, "partition", _spy)
    monkeypatch.setenv("OPTBENCH_WORKERS", "6")
    spec = _spec(100)
    array_sum.optimized(array_sum.make_input(spec), spec)
    assert seen == [6]


@pytest.mark.parametrize("chunk", [0, -4])
def test_non_positive_chunk_is_rejected(chunk):
    spec = _spec(10, chunk=chunk)
    with pytest.raises(DomainViolation):
        array_sum.make_input(spec)
    with pytest.raises(DomainViolation):
        array_sum.baseline(np.ones(10), spec)
