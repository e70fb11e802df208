"""
CPU kernel ops.

Each module defines a `SPEC` (KernelSpec), `make_input`, `baseline`,
`optimized`, `checksum`, and a `KERNEL` (KernelPair) bundling them for the
registry and the equivalence verifier.
"""
