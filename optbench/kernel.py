"""
Kernel pair: one workload with a baseline and an optimized variant.

Both variants take `(input, spec)` and return an output owned by the caller;
`checksum` collapses an output into one comparable scalar. A kernel whose
optimized variant also reduces its own checksum differently (e.g. through
vector lanes) supplies `optimized_checksum`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

from optbench.buffers import owned_copy
from optbench.spec import KernelSpec

Variant = Literal["baseline", "optimized"]

VARIANTS = ("baseline", "optimized")


@dataclass(frozen=True)
class KernelPair:
    spec: KernelSpec
    make_input: Callable[[KernelSpec], Any]
    baseline: Callable[[Any, KernelSpec], Any]
    optimized: Callable[[Any, KernelSpec], Any]
    checksum: Callable[[Any], Any]
    optimized_checksum: Optional[Callable[[Any, KernelSpec], Any]] = None
    # True when a variant mutates its input (sort kernels).
    mutates_input: bool = False

    @property
    def name(self) -> str:
        return self.spec.name

    def copy_input(self, x: Any) -> Any:
        return owned_copy(x)

    def run(self, variant: Variant, x: Any, spec: Optional[KernelSpec] = None) -> Any:
        s = spec or self.spec
        if variant == "baseline":
            return self.baseline(x, s)
        if variant == "optimized":
            return self.optimized(x, s)
        raise ValueError(f"unknown variant {variant!r}; expected one of {VARIANTS}")

    def checksum_of(self, variant: Variant, out: Any, spec: Optional[KernelSpec] = None) -> Any:
        if variant == "optimized" and self.optimized_checksum is not None:
            return self.optimized_checksum(out, spec or self.spec)
        return self.checksum(out)


__all__ = ["Variant", "VARIANTS", "KernelPair"]
