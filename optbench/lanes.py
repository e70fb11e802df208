"""
Fixed-width vector lanes.

A small operation set (load, fused multiply-add, horizontal sum) standing in
for hand-written SIMD intrinsics. Kernels are written against a `VectorLanes`
of width W; W = 1 is the scalar fallback and runs the same code path.

The lane-major view of a contiguous 1-D buffer is `buf[:full].reshape(-1, W)`:
row s holds the W elements processed by vector step s. Elements past `full`
(the last `n % W`) are the caller's scalar remainder and are never touched
here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from optbench.hardware_profile import HardwareProfile, current_profile


@dataclass(frozen=True)
class VectorLanes:
    width: int

    def __post_init__(self) -> None:
        if int(self.width) < 1:
            raise ValueError(f"lane width must be >= 1, got {self.width}")

    @classmethod
    def for_dtype(cls, dtype=np.float64, profile: Optional[HardwareProfile] = None) -> "VectorLanes":
        prof = profile or current_profile()
        return cls(prof.lane_width(dtype))

    def split(self, n: int) -> Tuple[int, int]:
        """(elements covered by full vector steps, scalar remainder count)."""
        full = n - n % self.width
        return full, n - full

    def load(self, buf: np.ndarray, full: Optional[int] = None) -> np.ndarray:
        """Lane-major view of the first `full` elements of a 1-D buffer."""
        if full is None:
            full, _ = self.split(buf.shape[0])
        return buf[:full].reshape(-1, self.width)

    def fma(self, acc: np.ndarray, scale: float, src: np.ndarray) -> None:
        """acc += scale * src, lane-wise, in place (both lane-major views)."""
        acc += scale * src

    def hsum(self, buf: np.ndarray) -> float:
        """
        Vector reduction: per-lane accumulators over all full steps, lanes
        combined in lane order, then the scalar tail added in index order.
        """
        flat = np.ascontiguousarray(buf, dtype=np.float64).reshape(-1)
        full, _ = self.split(flat.shape[0])
        total = 0.0
        if full:
            # Reducing over axis 0 adds step rows one after another per lane.
            lanes = np.add.reduce(self.load(flat, full), axis=0)
            for v in lanes:
                total += float(v)
        for v in flat[full:]:
            total += float(v)
        return total


__all__ = ["VectorLanes"]
