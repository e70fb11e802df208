import threading

import pytest

from optbench.workers import fork_join, partition


@pytest.mark.parametrize("n,p", [(1, 1), (10, 3), (10, 10), (7, 2), (100, 8), (5, 16)])
def test_partition_is_contiguous_and_covering(n, p):
    blocks = partition(n, p)
    assert len(blocks) == min(n, p)
    assert blocks[0][0] == 0
    assert blocks[-1][1] == n
    for (_, stop), (start, _) in zip(blocks, blocks[1:]):
        assert stop == start
    sizes = [stop - start for start, stop in blocks]
    assert max(sizes) - min(sizes) <= 1


def test_partition_empty_range_has_no_blocks():
    assert partition(0, 4) == []


def test_partition_rejects_bad_arguments():
    with pytest.raises(ValueError):
        partition(-1, 2)
    with pytest.raises(ValueError):
        partition(10, 0)


def test_fork_join_returns_results_in_block_order():
    blocks = partition(40, 4)
    seen = []
    lock = threading.Lock()

    def work(start, stop):
        with lock:
            seen.append(start)
        return list(range(start, stop))

    out = fork_join(work, blocks)
    assert [r[0] for r in out] == [b[0] for b in blocks]
    assert sum(out, []) == list(range(40))
    assert sorted(seen) == [b[0] for b in blocks]


def test_fork_join_propagates_worker_errors():
    def work(start, stop):
        if start > 0:
            raise RuntimeError("boom")
        return 0

    with pytest.raises(RuntimeError, match="boom"):
        fork_join(work, partition(10, 2))


def test_fork_join_without_blocks():
    assert fork_join(lambda a, b: 1, []) == []
