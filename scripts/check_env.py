"""
Environment validation script.

Reports what the kernel suite will use on this host: interpreter, numpy,
the resolved hardware profile (lane widths) and the reduction worker count.
"""

from __future__ import annotations

import argparse
import importlib
import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from optbench.hardware_profile import current_profile, default_workers  # noqa: E402


@dataclass(frozen=True)
class CheckResult:
    name: str
    ok: bool
    detail: str = ""
    hint: str = ""


def _check_python() -> CheckResult:
    v = sys.version_info
    ok = (v.major, v.minor) >= (3, 10)
    return CheckResult("python", ok, detail=f"{v.major}.{v.minor}.{v.micro}", hint="need Python>=3.10" if not ok else "")


def _check_import(mod: str, *, required: bool, hint: str) -> CheckResult:
    try:
        m = importlib.import_module(mod)
    except ImportError as e:
        return CheckResult(mod, False, detail=f"{type(e).__name__}: {e}", hint=(hint if required else f"optional: {hint}"))
    ver = getattr(m, "__version__", None)
    return CheckResult(mod, True, detail=f"ok{(' ' + str(ver)) if ver else ''}")


def _check_profile() -> CheckResult:
    try:
        prof = current_profile()
    except (OSError, ValueError, TypeError) as e:
        return CheckResult("profile", False, detail=f"{type(e).__name__}: {e}", hint="check OPTBENCH_PROFILE")
    detail = (
        f"{prof.vector_bits}-bit vectors, f64 lanes={prof.lane_width(np.float64)}, "
        f"byte lanes={prof.lane_width(np.uint8)}, workers={default_workers(prof)}"
    )
    return CheckResult("profile", True, detail=detail)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--strict", action="store_true", help="treat optional components as required (fail if missing)")
    args = ap.parse_args()

    print(f"platform: {platform.platform()}")
    print(f"cwd: {os.getcwd()}")

    checks = [
        _check_python(),
        _check_import("numpy", required=True, hint="pip install -e ."),
        _check_import("pytest", required=bool(args.strict), hint="pip install -e '.[test]'"),
        _check_profile(),
    ]

    ok_all = True
    for c in checks:
        status = "OK" if c.ok else "FAIL"
        print(f"[{status}] {c.name}: {c.detail}")
        if (not c.ok) and c.hint:
            print(f"  hint: {c.hint}")
        ok_all = ok_all and bool(c.ok)

    raise SystemExit(0 if ok_all else 1)


if __name__ == "__main__":
    main()
