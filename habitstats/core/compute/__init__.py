"""
Shared compute infrastructure for habitstats.

Timing utilities and linear algebra kernels shared by the regression
backends. Domain-specific backends live in {domain}/backends/.

Submodules:
    timing: Execution timing utilities
    linalg: Linear algebra kernels (Gaussian elimination, QR)
"""

from habitstats.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
