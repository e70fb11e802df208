"""
Equivalence verifier: run baseline and optimized variants on identical input
and compare their checksums within the kernel's declared tolerance.

Each variant receives its own copy of the input, so an in-place kernel (the
sort pair) cannot contaminate the other side. Allocation failures and domain
violations are reported as outcomes rather than raised; so is a checksum
divergence. `require_equivalent` turns a failed result back into its error.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple

from optbench.errors import AllocationFailure, DomainViolation, KernelError, NumericDivergence
from optbench.kernel import KernelPair
from optbench.spec import KernelSpec
from verify.gen_cases import TestCase
from verify.tolerances import Tolerances, compare_checksums, infer_tolerances

logger = logging.getLogger(__name__)

Outcome = Literal["ok", "divergence", "domain_violation", "allocation_failure"]


@dataclass
class DiffResult:
    kernel: str
    ok: bool
    outcome: Outcome
    baseline_checksum: Any = None
    optimized_checksum: Any = None
    abs_err: float = 0.0
    rel_err: float = 0.0
    tolerances: Dict[str, float] = field(default_factory=dict)
    baseline_ms: Optional[float] = None
    optimized_ms: Optional[float] = None
    summary: str = ""
    error: Optional[KernelError] = field(default=None, repr=False)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "kernel": self.kernel,
            "ok": bool(self.ok),
            "outcome": self.outcome,
            "baseline_checksum": self.baseline_checksum,
            "optimized_checksum": self.optimized_checksum,
            "abs_err": float(self.abs_err),
            "rel_err": float(self.rel_err),
            "tolerances": dict(self.tolerances),
            "baseline_ms": self.baseline_ms,
            "optimized_ms": self.optimized_ms,
            "summary": self.summary,
        }


@dataclass
class Counterexample:
    case: TestCase
    diff: DiffResult
    spec: Dict[str, Any]
    hints: List[str]


def _timed(kernel: KernelPair, variant: str, x: Any, spec: KernelSpec) -> Tuple[Any, float]:
    t0 = time.perf_counter()
    out = kernel.run(variant, x, spec)  # type: ignore[arg-type]
    ms = (time.perf_counter() - t0) * 1e3
    return kernel.checksum_of(variant, out, spec), ms  # type: ignore[arg-type]


def run_pair(
    kernel: KernelPair,
    spec: Optional[KernelSpec] = None,
    *,
    inputs: Any = None,
    tolerances: Optional[Tolerances] = None,
) -> DiffResult:
    s = spec or kernel.spec
    tol = tolerances or infer_tolerances(s)
    try:
        x = kernel.make_input(s) if inputs is None else inputs
        cb, b_ms = _timed(kernel, "baseline", kernel.copy_input(x), s)
        co, o_ms = _timed(kernel, "optimized", kernel.copy_input(x), s)
    except AllocationFailure as e:
        logger.warning("%s: allocation failure: %s", s.name, e)
        return DiffResult(s.name, False, "allocation_failure", tolerances=tol.to_dict(), summary=str(e), error=e)
    except DomainViolation as e:
        logger.info("%s: domain violation: %s", s.name, e)
        return DiffResult(s.name, False, "domain_violation", tolerances=tol.to_dict(), summary=str(e), error=e)

    ok, abs_err, rel_err = compare_checksums(cb, co, tol)
    res = DiffResult(
        kernel=s.name,
        ok=ok,
        outcome="ok" if ok else "divergence",
        baseline_checksum=cb,
        optimized_checksum=co,
        abs_err=abs_err,
        rel_err=rel_err,
        tolerances=tol.to_dict(),
        baseline_ms=b_ms,
        optimized_ms=o_ms,
        summary="ok" if ok else f"checksum mismatch: {cb!r} vs {co!r}",
    )
    if not ok:
        res.error = NumericDivergence(s.name, cb, co, atol=tol.atol, rtol=tol.rtol)
        logger.warning("%s (size=%d): %s", s.name, s.size, res.summary)
    else:
        logger.debug("%s (size=%d): ok baseline=%.3fms optimized=%.3fms", s.name, s.size, b_ms, o_ms)
    return res


def run_diff(
    kernel: KernelPair,
    cases: Iterable[TestCase],
    *,
    tolerances: Optional[Tolerances] = None,
) -> Tuple[List[DiffResult], List[Counterexample]]:
    diffs: List[DiffResult] = []
    counterexamples: List[Counterexample] = []
    for case in cases:
        spec = case.spec_for(kernel.spec)
        diff = run_pair(kernel, spec, inputs=case.inputs, tolerances=tolerances)
        diffs.append(diff)
        if not diff.ok:
            counterexamples.append(
                Counterexample(case=case, diff=diff, spec=spec.to_json_dict(), hints=_hints(diff))
            )
    return diffs, counterexamples


def _hints(diff: DiffResult) -> List[str]:
    if diff.outcome == "divergence":
        return ["check remainder handling for sizes not divisible by the lane width / worker count"]
    if diff.outcome == "domain_violation":
        return ["input is outside the optimized variant's assumed domain"]
    if diff.outcome == "allocation_failure":
        return ["reduce the kernel size or raise OPTBENCH_MAX_ALLOC_MB"]
    return []


def require_equivalent(diff: DiffResult) -> DiffResult:
    """Return `diff` unchanged if it passed, else raise the error it recorded."""
    if diff.ok:
        return diff
    if diff.error is not None:
        raise diff.error
    raise NumericDivergence(
        diff.kernel,
        diff.baseline_checksum,
        diff.optimized_checksum,
        atol=diff.tolerances.get("atol", 0.0),
        rtol=diff.tolerances.get("rtol", 0.0),
    )


__all__ = ["Outcome", "DiffResult", "Counterexample", "run_pair", "run_diff", "require_equivalent"]
