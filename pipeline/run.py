"""
Thin benchmark harness: time a kernel variant and read back its checksum.

Input generation is done once per variant and kept out of the timed region;
every repeat gets a fresh copy so in-place kernels always see unsorted data.
The reported time is the median of the repeats.
"""

from __future__ import annotations

import logging
import statistics
import time
from typing import Iterable, List, Optional

from optbench import registry
from optbench.errors import AllocationFailure, DomainViolation
from optbench.spec import KernelSpec
from pipeline.interfaces import BenchRow, BenchSample, VariantName
from verify.tolerances import compare_checksums, infer_tolerances

logger = logging.getLogger(__name__)


def run_kernel(
    name: str,
    variant: VariantName,
    *,
    spec: Optional[KernelSpec] = None,
    repeats: int = 1,
    warmup: int = 0,
) -> BenchSample:
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    kernel = registry.get(name)
    s = spec or kernel.spec
    x = kernel.make_input(s)
    for _ in range(max(0, warmup)):
        kernel.run(variant, kernel.copy_input(x), s)
    samples: List[float] = []
    checksum = None
    for _ in range(repeats):
        work = kernel.copy_input(x)
        t0 = time.perf_counter()
        out = kernel.run(variant, work, s)
        samples.append((time.perf_counter() - t0) * 1e3)
        checksum = kernel.checksum_of(variant, out, s)
    elapsed = statistics.median(samples)
    logger.info("%s/%s size=%d: %.3f ms (median of %d)", name, variant, s.size, elapsed, repeats)
    return BenchSample(kernel=name, variant=variant, size=int(s.size), checksum=checksum, elapsed_ms=elapsed, samples_ms=samples)


def run_suite(
    names: Iterable[str],
    *,
    size: Optional[int] = None,
    repeats: int = 1,
    warmup: int = 0,
) -> List[BenchRow]:
    rows: List[BenchRow] = []
    for name in names:
        kernel = registry.get(name)
        spec = kernel.spec if size is None else kernel.spec.resized(size)
        try:
            base = run_kernel(name, "baseline", spec=spec, repeats=repeats, warmup=warmup)
            opt = run_kernel(name, "optimized", spec=spec, repeats=repeats, warmup=warmup)
        except AllocationFailure as e:
            rows.append(BenchRow(kernel=name, ok=False, outcome="allocation_failure", summary=str(e)))
            continue
        except DomainViolation as e:
            rows.append(BenchRow(kernel=name, ok=False, outcome="domain_violation", summary=str(e)))
            continue
        ok, _, _ = compare_checksums(base.checksum, opt.checksum, infer_tolerances(spec))
        speedup = base.elapsed_ms / opt.elapsed_ms if opt.elapsed_ms > 0 else None
        rows.append(
            BenchRow(
                kernel=name,
                ok=ok,
                outcome="ok" if ok else "divergence",
                baseline=base,
                optimized=opt,
                speedup=speedup,
                summary="ok" if ok else f"checksum mismatch: {base.checksum!r} vs {opt.checksum!r}",
            )
        )
    return rows


__all__ = ["run_kernel", "run_suite"]
