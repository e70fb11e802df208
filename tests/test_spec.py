import pytest

from kernels.cpu.ops import array_sum
from optbench import registry
from optbench.spec import KernelSpec


def test_params_are_read_only():
    spec = registry.get("array-sum").spec
    with pytest.raises(TypeError):
        spec.params["chunk"] = 0
    assert array_sum.SPEC.param("chunk") == 1 << 20


def test_params_are_copied_at_construction():
    raw = {"chunk": 8}
    spec = KernelSpec(name="toy", input_shape="f64[N]", size=4, params=raw)
    raw["chunk"] = 0
    assert spec.param("chunk") == 8


def test_resized_overrides_params_without_touching_the_original():
    spec = array_sum.SPEC.resized(10, chunk=3)
    assert spec.size == 10
    assert spec.param("chunk") == 3
    assert array_sum.SPEC.param("chunk") == 1 << 20
    assert array_sum.SPEC.size == 100_000_000


def test_resized_keeps_seed_unless_given():
    spec = KernelSpec(name="toy", input_shape="i64[N]", size=4, seed=7)
    assert spec.resized(2).seed == 7
    assert spec.resized(2, seed=9).seed == 9


def test_invalid_fields_are_rejected():
    with pytest.raises(ValueError):
        KernelSpec(name="toy", input_shape="i64[N]", size=-1)
    with pytest.raises(ValueError):
        KernelSpec(name="toy", input_shape="i64[N]", size=1, tolerance_kind="loose")


def test_json_dict_has_plain_params():
    d = array_sum.SPEC.resized(4).to_json_dict()
    assert d["params"] == {"chunk": 1 << 20}
    assert type(d["params"]) is dict
