"""
Records exchanged between the kernel core and the benchmark harness.

Keep this module dependency-light so scripts can import it without pulling in
any kernel module.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional


VariantName = Literal["baseline", "optimized"]


@dataclass
class BenchSample:
    """One checksum plus the elapsed-time samples of a single variant."""

    kernel: str
    variant: VariantName
    size: int
    checksum: Any
    elapsed_ms: float
    samples_ms: List[float] = field(default_factory=list)

    def to_json_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BenchRow:
    """Baseline and optimized samples for one kernel, plus the equivalence verdict."""

    kernel: str
    ok: bool
    outcome: str
    baseline: Optional[BenchSample] = None
    optimized: Optional[BenchSample] = None
    speedup: Optional[float] = None
    summary: str = ""

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "kernel": self.kernel,
            "ok": bool(self.ok),
            "outcome": self.outcome,
            "baseline": self.baseline.to_json_dict() if self.baseline else None,
            "optimized": self.optimized.to_json_dict() if self.optimized else None,
            "speedup": self.speedup,
            "summary": self.summary,
        }


__all__ = ["VariantName", "BenchSample", "BenchRow"]
