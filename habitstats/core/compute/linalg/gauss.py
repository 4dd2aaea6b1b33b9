"""
Gaussian elimination kernels.

Dense solve and inverse for the small symmetric systems produced by the
normal equations. Both routines use partial pivoting and refuse to
continue when the best available pivot is below a tolerance relative to
the largest entry of the input, so a singular or ill-conditioned Gram
matrix surfaces as SingularMatrixError instead of NaN.

The loops run over columns only (p is at most a few dozen); row
operations are vectorized. Operation order is fixed, so identical inputs
give bit-identical outputs.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from habitstats.core.exceptions import SingularMatrixError

DEFAULT_PIVOT_TOLERANCE = 1e-10


@dataclass(frozen=True)
class EliminationResult:
    """
    Result of a pivoted elimination.

    Attributes:
        solution: Solution vector (solve) or inverse matrix (invert)
        min_pivot: Smallest pivot magnitude accepted during elimination
        threshold: Absolute threshold pivots were compared against
        swaps: Number of row interchanges performed
    """
    solution: NDArray[np.floating[Any]]
    min_pivot: float
    threshold: float
    swaps: int


def pivot_threshold(A: NDArray[np.floating[Any]], tol: float) -> float:
    """Absolute pivot threshold: tol scaled by the largest |A_ij| (at least tol)."""
    scale = float(np.max(np.abs(A))) if A.size else 0.0
    return tol * max(scale, 1.0)


def _check_square(A: NDArray[np.floating[Any]], name: str) -> int:
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"{name} must be a square matrix, got shape {A.shape}")
    return A.shape[0]


def _eliminate(
    aug: NDArray[np.floating[Any]],
    p: int,
    threshold: float,
    matrix_name: str,
    jordan: bool,
) -> tuple[float, int]:
    """
    In-place pivoted elimination on an augmented [A | B] buffer.

    With jordan=False the left block ends upper triangular (forward
    elimination only); with jordan=True it ends as the identity.
    """
    min_pivot = np.inf
    swaps = 0

    for col in range(p):
        # Partial pivoting: largest magnitude at or below the diagonal
        pivot_row = col + int(np.argmax(np.abs(aug[col:, col])))
        pivot = abs(aug[pivot_row, col])

        if not np.isfinite(pivot) or pivot < threshold:
            raise SingularMatrixError(
                f"{matrix_name} is singular or ill-conditioned: pivot {pivot:.3e} "
                f"at column {col} is below tolerance {threshold:.3e}",
                matrix_name=matrix_name,
                pivot=float(pivot),
                tolerance=threshold,
                rank=col,
                expected_rank=p,
            )

        if pivot_row != col:
            aug[[col, pivot_row]] = aug[[pivot_row, col]]
            swaps += 1

        min_pivot = min(min_pivot, pivot)

        if jordan:
            aug[col] /= aug[col, col]
            others = np.arange(p) != col
            factors = aug[others, col][:, np.newaxis]
            aug[others] -= factors * aug[col]
        else:
            factors = (aug[col + 1:, col] / aug[col, col])[:, np.newaxis]
            aug[col + 1:, col:] -= factors * aug[col, col:]

    return float(min_pivot), swaps


def gauss_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    tol: float = DEFAULT_PIVOT_TOLERANCE,
    matrix_name: str = "X'X",
) -> EliminationResult:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    Args:
        A: Square coefficient matrix (p x p)
        b: Right-hand side (p,)
        tol: Pivot tolerance relative to max|A_ij|
        matrix_name: Name used in error messages

    Returns:
        EliminationResult whose solution is x (p,)

    Raises:
        SingularMatrixError: If any pivot falls below tolerance
    """
    A = np.asarray(A, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    p = _check_square(A, matrix_name)
    if b.shape != (p,):
        raise ValueError(f"right-hand side must have shape ({p},), got {b.shape}")

    threshold = pivot_threshold(A, tol)
    aug = np.column_stack([A, b])
    min_pivot, swaps = _eliminate(aug, p, threshold, matrix_name, jordan=False)

    # Back substitution on the upper-triangular block
    x = np.zeros(p, dtype=np.float64)
    for row in range(p - 1, -1, -1):
        acc = aug[row, p] - aug[row, row + 1:p] @ x[row + 1:]
        x[row] = acc / aug[row, row]

    return EliminationResult(solution=x, min_pivot=min_pivot, threshold=threshold, swaps=swaps)


def gauss_jordan_inverse(
    A: NDArray[np.floating[Any]],
    tol: float = DEFAULT_PIVOT_TOLERANCE,
    matrix_name: str = "X'X",
) -> EliminationResult:
    """
    Invert A by Gauss-Jordan elimination on [A | I].

    Args:
        A: Square matrix (p x p)
        tol: Pivot tolerance relative to max|A_ij|
        matrix_name: Name used in error messages

    Returns:
        EliminationResult whose solution is A⁻¹ (p x p)

    Raises:
        SingularMatrixError: If any pivot falls below tolerance
    """
    A = np.asarray(A, dtype=np.float64)
    p = _check_square(A, matrix_name)

    threshold = pivot_threshold(A, tol)
    aug = np.hstack([A, np.eye(p)])
    min_pivot, swaps = _eliminate(aug, p, threshold, matrix_name, jordan=True)

    return EliminationResult(
        solution=aug[:, p:].copy(),
        min_pivot=min_pivot,
        threshold=threshold,
        swaps=swaps,
    )
