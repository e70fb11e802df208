"""
Error taxonomy shared by kernels, the equivalence verifier and the harness.

All failures here are deterministic: re-running the same kernel on the same
input reproduces them, so callers report them instead of retrying.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple


class KernelError(RuntimeError):
    """Base class for kernel-level failures."""


class AllocationFailure(KernelError):
    """Raised when a kernel buffer could not be obtained."""

    def __init__(self, shape: Tuple[int, ...], dtype: str, reason: str = "") -> None:
        self.shape = tuple(int(d) for d in shape)
        self.dtype = str(dtype)
        self.reason = str(reason)
        msg = f"cannot allocate buffer shape={self.shape} dtype={self.dtype}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DomainViolation(KernelError):
    """
    Raised when an input falls outside the domain an optimization assumes
    (value range, fixed size, pattern length, overflow-free index range).
    """

    def __init__(self, kernel: str, message: str, *, value: Optional[Any] = None) -> None:
        self.kernel = str(kernel)
        self.value = value
        super().__init__(f"{kernel}: {message}")


# Counting sort docs call it a domain error; keep both names importable.
DomainError = DomainViolation


class NumericDivergence(KernelError):
    """Raised when baseline and optimized checksums differ beyond tolerance."""

    def __init__(self, kernel: str, baseline: Any, optimized: Any, *, atol: float, rtol: float) -> None:
        self.kernel = str(kernel)
        self.baseline = baseline
        self.optimized = optimized
        self.atol = float(atol)
        self.rtol = float(rtol)
        super().__init__(
            f"{kernel}: baseline checksum {baseline!r} != optimized checksum {optimized!r} "
            f"(atol={self.atol:g}, rtol={self.rtol:g})"
        )


__all__ = ["KernelError", "AllocationFailure", "DomainViolation", "DomainError", "NumericDivergence"]
