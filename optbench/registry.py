"""
Kernel registry (kernel name -> KernelPair).

The set is closed: the six workloads live in `kernels.cpu.ops` and are
imported lazily on first lookup.
"""

from __future__ import annotations

import importlib
from typing import Dict, List

from optbench.kernel import KernelPair

_MODULES: Dict[str, str] = {
    "array-sum": "kernels.cpu.ops.array_sum",
    "bubble-sort": "kernels.cpu.ops.bubble_sort",
    "fibonacci": "kernels.cpu.ops.fibonacci",
    "matrix-multiply": "kernels.cpu.ops.matrix_multiply",
    "prime-sieve": "kernels.cpu.ops.prime_sieve",
    "string-search": "kernels.cpu.ops.string_search",
}

_REGISTRY: Dict[str, KernelPair] = {}


def names() -> List[str]:
    return list(_MODULES)


def get(name: str) -> KernelPair:
    if name not in _REGISTRY:
        mod = _MODULES.get(name)
        if mod is None:
            raise KeyError(f"unknown kernel: {name} (known: {', '.join(_MODULES)})")
        _REGISTRY[name] = importlib.import_module(mod).KERNEL
    return _REGISTRY[name]


def all_kernels() -> List[KernelPair]:
    return [get(n) for n in _MODULES]


__all__ = ["names", "get", "all_kernels"]
