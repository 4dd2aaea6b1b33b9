"""
QR decomposition implementations.

Least squares directly against X (X = QR, β = R⁻¹Q'y) without forming
X'X, which squares the condition number. Used by the QR regression
backend as the numerically stronger alternative to the normal equations.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from habitstats.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthonormal columns (n x p, reduced mode)
        R: Upper triangular matrix (p x p)
        rank: Numerical rank determined from the R diagonal
        tol: Absolute tolerance the R diagonal was compared against
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int
    tol: float


def qr_cpu(X: NDArray[np.floating[Any]], rtol: float | None = None) -> QRResult:
    """
    Reduced QR decomposition using LAPACK (via NumPy).

    Args:
        X: Matrix to decompose (n x p), n >= p
        rtol: Rank tolerance relative to max|R_ii|. Defaults to
            max(n, p) * machine epsilon.

    Returns:
        QRResult with Q, R and numerical rank
    """
    Q, R = np.linalg.qr(X, mode='reduced')

    diag_R = np.abs(np.diag(R))
    if rtol is None:
        rtol = max(X.shape) * np.finfo(np.float64).eps

    if len(diag_R) > 0 and np.max(diag_R) > 0:
        tol = rtol * float(np.max(diag_R))
        rank = int(np.sum(diag_R > tol))
    else:
        tol = 0.0
        rank = 0

    return QRResult(Q=Q, R=R, rank=rank, tol=tol)


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    rtol: float | None = None,
) -> tuple[NDArray[np.floating[Any]], QRResult]:
    """
    Solve least squares via QR decomposition.

    Args:
        X: Design matrix (n x p), n >= p
        y: Response vector (n,)
        rtol: Rank tolerance relative to max|R_ii|

    Returns:
        (β, QRResult) so callers can reuse R for the unscaled covariance

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    n, p = X.shape
    qr_result = qr_cpu(X, rtol=rtol)

    if qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            tolerance=qr_result.tol,
            rank=qr_result.rank,
            expected_rank=p,
        )

    Qty = qr_result.Q.T @ y
    beta = solve_triangular(qr_result.R, Qty, lower=False)

    return beta, qr_result


def qr_unscaled_covariance(R: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    (X'X)⁻¹ from the R factor: (R'R)⁻¹ = R⁻¹ R⁻ᵀ.
    """
    p = R.shape[0]
    R_inv = solve_triangular(R, np.eye(p), lower=False)
    return R_inv @ R_inv.T
