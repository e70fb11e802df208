"""
Equivalence check for the six kernel pairs.

Per kernel:
1) Generate deterministic in-contract cases (edge sizes + capped size).
2) Run baseline and optimized on independent copies of each input.
3) Compare checksums within the kernel's tolerance.
4) Probe out-of-contract inputs and expect a reported domain violation.

`--full` additionally runs each kernel once at its default size (slow: the
baselines are intentionally naive).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from optbench import registry  # noqa: E402
from verify.diff_runner import run_diff, run_pair  # noqa: E402
from verify.gen_cases import generate_cases_split  # noqa: E402


def _verify_kernel(name: str, *, limit: int, full: bool) -> Dict[str, Any]:
    kernel = registry.get(name)
    cases = generate_cases_split(kernel.spec, limit=limit)
    diffs, cex = run_diff(kernel, cases.in_contract)
    probes, _ = run_diff(kernel, cases.out_of_contract)
    errors: List[str] = [f"size={c.case.size}: {c.diff.summary}" for c in cex]
    for case, probe in zip(cases.out_of_contract, probes):
        if probe.outcome != "domain_violation":
            errors.append(f"probe '{case.note}' expected domain_violation, got {probe.outcome}")
    report: Dict[str, Any] = {
        "kernel": name,
        "cases": [d.to_json_dict() for d in diffs],
        "probes": [p.to_json_dict() for p in probes],
    }
    if full:
        d = run_pair(kernel)
        report["full"] = d.to_json_dict()
        if not d.ok:
            errors.append(f"full size: {d.summary}")
    report["ok"] = not errors
    report["errors"] = errors
    return report


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--kernel", action="append", default=[], help="repeatable; default checks all kernels")
    ap.add_argument("--limit", type=int, default=10, help="in-contract cases per kernel")
    ap.add_argument("--full", action="store_true", help="also run each kernel at its default size")
    ap.add_argument("--out", default=None, help="optional JSON report path")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING), format="%(levelname)s %(name)s: %(message)s")

    reports = [_verify_kernel(n, limit=int(args.limit), full=bool(args.full)) for n in (args.kernel or registry.names())]
    for r in reports:
        status = "OK" if r["ok"] else "FAIL"
        print(f"[{status}] {r['kernel']}: {len(r['cases'])} cases, {len(r['probes'])} probes")
        for e in r["errors"]:
            print(f"    {e}")
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps({"results": reports}, indent=2, default=str), encoding="utf-8")
    return 0 if all(r["ok"] for r in reports) else 1


if __name__ == "__main__":
    raise SystemExit(main())
