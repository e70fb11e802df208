"""
Host profile used to pick vector lane widths and worker counts.

Profiles can be loaded from JSON or from the built-in presets; nothing here
probes the CPU. `OPTBENCH_PROFILE` selects a preset name or JSON path and
`OPTBENCH_WORKERS` overrides the worker count for the parallel reduction.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HardwareProfile:
    num_cores: int
    vector_bits: int
    cache_line_bytes: int = 64

    def lane_width(self, dtype=np.float64) -> int:
        """Elements of `dtype` per vector register (1 means scalar)."""
        itemsize = np.dtype(dtype).itemsize
        return max(1, int(self.vector_bits) // (8 * itemsize))


HARDWARE_PROFILES: Dict[str, Dict] = {
    "scalar": {"num_cores": 1, "vector_bits": 64},
    "generic_sse": {"num_cores": 4, "vector_bits": 128},
    "generic_avx2": {"num_cores": 8, "vector_bits": 256},
    "generic_avx512": {"num_cores": 16, "vector_bits": 512},
}

DEFAULT_PROFILE = "generic_avx2"


def load_profile(name_or_path: str) -> HardwareProfile:
    p = Path(name_or_path)
    if p.exists():
        data = json.loads(p.read_text(encoding="utf-8"))
        return HardwareProfile(**data)
    if name_or_path in HARDWARE_PROFILES:
        return HardwareProfile(**HARDWARE_PROFILES[name_or_path])
    raise ValueError(f"unknown profile {name_or_path}")


def current_profile() -> HardwareProfile:
    """Profile from `OPTBENCH_PROFILE`, else the default preset sized to this host."""
    name = os.getenv("OPTBENCH_PROFILE")
    if name:
        return load_profile(name)
    base = HARDWARE_PROFILES[DEFAULT_PROFILE]
    return HardwareProfile(num_cores=os.cpu_count() or 1, vector_bits=base["vector_bits"])


def default_workers(profile: Optional[HardwareProfile] = None) -> int:
    raw = os.getenv("OPTBENCH_WORKERS")
    if raw:
        try:
            v = int(raw)
        except ValueError:
            v = 0
        if v > 0:
            return v
        logger.warning("ignoring invalid OPTBENCH_WORKERS=%r", raw)
    prof = profile or current_profile()
    return max(1, int(prof.num_cores))


__all__ = ["HardwareProfile", "HARDWARE_PROFILES", "load_profile", "current_profile", "default_workers"]
