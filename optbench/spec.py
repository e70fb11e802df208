"""
Per-kernel configuration.

A KernelSpec is defined once per kernel module and passed explicitly into the
input builder and both kernel variants. Nothing in kernel logic reads a
module-level size constant; tests shrink a workload with `resized`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional


ToleranceKind = Literal["exact", "relative"]

TOLERANCE_KINDS = {"exact", "relative"}


@dataclass(frozen=True)
class KernelSpec:
    name: str
    # Human-readable shape, e.g. "f64[N]" or "f64[N,N]".
    input_shape: str
    # Element count, matrix order, term count or bound depending on the kernel.
    size: int
    seed: Optional[int] = None
    tolerance_kind: ToleranceKind = "exact"
    # Read-only after construction; derive variants with `resized`.
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.tolerance_kind not in TOLERANCE_KINDS:
            raise ValueError(f"unknown tolerance kind {self.tolerance_kind!r} for {self.name}")
        if int(self.size) < 0:
            raise ValueError(f"negative size for {self.name}: {self.size}")
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def is_exact(self) -> bool:
        return self.tolerance_kind == "exact"

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    def resized(self, size: int, *, seed: Optional[int] = None, **params: Any) -> "KernelSpec":
        """Return a copy with a different size, optionally overriding seed and params."""
        merged = dict(self.params)
        merged.update(params)
        return replace(self, size=int(size), seed=self.seed if seed is None else int(seed), params=merged)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "input_shape": self.input_shape,
            "size": int(self.size),
            "seed": self.seed,
            "tolerance_kind": self.tolerance_kind,
            "params": dict(self.params),
        }


__all__ = ["ToleranceKind", "KernelSpec"]
