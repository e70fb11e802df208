"""
CPU kernel library.

Six fixed workloads, each with a baseline and an optimized variant that must
agree on their checksum (exactly for integer outputs, within a relative
tolerance for floating sums). Kernel modules live in `kernels/cpu/ops/`.
"""
