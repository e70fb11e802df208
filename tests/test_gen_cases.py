from optbench import registry
from verify.diff_runner import run_diff
from verify.gen_cases import CASE_SIZE_CAPS, generate_cases, generate_cases_split


def test_cases_are_capped_and_deterministic():
    for kernel in registry.all_kernels():
        cases = generate_cases(kernel.spec, limit=50)
        assert cases
        assert all(c.size <= CASE_SIZE_CAPS[kernel.name] for c in cases)
        again = generate_cases(kernel.spec, limit=50)
        assert [(c.size, c.seed) for c in cases] == [(c.size, c.seed) for c in again]


def test_sizes_include_remainders():
    sizes = {c.size for c in generate_cases(registry.get("matrix-multiply").spec, limit=50)}
    assert {0, 1, 3, 5, 7, 17} <= sizes
    assert any(s % 4 for s in sizes)


def test_limit_truncates():
    assert len(generate_cases(registry.get("array-sum").spec, limit=3)) == 3


def test_planted_search_cases_come_first():
    cases = generate_cases(registry.get("string-search").spec, limit=4)
    assert all(c.inputs is not None for c in cases)


def test_every_out_of_contract_probe_is_a_domain_violation():
    for kernel in registry.all_kernels():
        split = generate_cases_split(kernel.spec, limit=2)
        diffs, cex = run_diff(kernel, split.out_of_contract)
        assert len(cex) == len(split.out_of_contract)
        assert all(d.outcome == "domain_violation" for d in diffs), kernel.name
