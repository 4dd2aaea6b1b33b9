"""
Linear algebra kernels for habitstats.

All functions follow these conventions:
    - NumPy/SciPy only (LAPACK under the hood for QR)
    - Each operation returns a structured result dataclass
    - Singularity is raised immediately as SingularMatrixError

Submodules:
    gauss: Gaussian elimination solve and Gauss-Jordan inverse
    qr: QR decomposition and least squares solve
"""

from habitstats.core.compute.linalg.gauss import (
    DEFAULT_PIVOT_TOLERANCE,
    EliminationResult,
    gauss_jordan_inverse,
    gauss_solve,
    pivot_threshold,
)
from habitstats.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
    qr_unscaled_covariance,
)

__all__ = [
    # Gaussian elimination
    "DEFAULT_PIVOT_TOLERANCE",
    "EliminationResult",
    "gauss_jordan_inverse",
    "gauss_solve",
    "pivot_threshold",
    # QR decomposition
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
    "qr_unscaled_covariance",
]
