"""
Benchmark suite: time baseline and optimized variants of every kernel.

Writes one compact JSON document with a checksum, the median elapsed time of
each variant, the speedup, and the equivalence verdict per kernel.

Typical usage:
  PYTHONPATH=. python scripts/benchmark_suite.py --kernel matrix-multiply --size 64 \\
    --repeats 5 --out artifacts/bench_latest.json
"""

from __future__ import annotations

import argparse
import json
import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import Any, Dict, List


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from optbench import registry  # noqa: E402
from optbench.hardware_profile import current_profile, default_workers  # noqa: E402
from pipeline.run import run_suite  # noqa: E402


def _git_head() -> str | None:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], cwd=str(ROOT), text=True, stderr=subprocess.DEVNULL).strip()
        return str(out)
    except (OSError, subprocess.CalledProcessError):
        return None


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--kernel", action="append", default=[], help="repeatable; default runs all 6 kernels")
    ap.add_argument("--size", type=int, default=None, help="override every kernel's default size")
    ap.add_argument("--repeats", type=int, default=3)
    ap.add_argument("--warmup", type=int, default=0)
    ap.add_argument("--out", required=True, help="write compact bench JSON to this path")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    names = list(args.kernel) or registry.names()
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    t0 = time.time()
    rows = run_suite(names, size=args.size, repeats=int(args.repeats), warmup=int(args.warmup))
    dt = time.time() - t0

    prof = current_profile()
    errors = [f"{r.kernel}: {r.outcome}: {r.summary}" for r in rows if not r.ok]
    out: Dict[str, Any] = {
        "kind": "optbench_benchmark_suite",
        "timestamp": int(time.time()),
        "git_commit": _git_head(),
        "runtime_s": float(dt),
        "config": {
            "kernels": names,
            "size": args.size,
            "repeats": int(args.repeats),
            "warmup": int(args.warmup),
            "workers": default_workers(prof),
            "vector_bits": int(prof.vector_bits),
        },
        "results": [r.to_json_dict() for r in rows],
        "ok": bool(not errors),
        "errors": errors,
    }
    out_path.write_text(json.dumps(out, indent=2, ensure_ascii=False), encoding="utf-8")
    for r in rows:
        speed = f"{r.speedup:.2f}x" if r.speedup else "-"
        print(f"{r.kernel:16s} {r.outcome:18s} speedup={speed}")
    return 1 if errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
