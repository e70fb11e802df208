from .errors import AllocationFailure, DomainError, DomainViolation, KernelError, NumericDivergence
from .kernel import KernelPair, VARIANTS
from .lanes import VectorLanes
from .spec import KernelSpec

__all__ = [
    "AllocationFailure",
    "DomainError",
    "DomainViolation",
    "KernelError",
    "NumericDivergence",
    "KernelPair",
    "VARIANTS",
    "VectorLanes",
    "KernelSpec",
]
