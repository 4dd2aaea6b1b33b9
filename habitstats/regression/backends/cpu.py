"""
CPU backends for habit regression.

CPUNormalEquationsBackend is the reference path: it forms the Gram
matrix X'X and solves the normal equations by Gaussian elimination with
partial pivoting. CPUQRBackend factors X directly (X = QR), which avoids
squaring the condition number. Both refuse a singular design with
SingularMatrixError rather than returning NaN.
"""

from typing import Any
import numpy as np

from habitstats.core.result import Result
from habitstats.core.compute.timing import Timer
from habitstats.core.compute.linalg.gauss import gauss_jordan_inverse, gauss_solve
from habitstats.core.compute.linalg.qr import qr_solve_cpu, qr_unscaled_covariance
from habitstats.regression._common import DEFAULT_CONFIG
from habitstats.regression.design import RegressionDesign
from habitstats.regression.solution import LinearParams

# Smallest accepted pivot within this factor of the threshold is reported
NEAR_SINGULAR_FACTOR = 1e3


def _residual_params(
    design: RegressionDesign,
    coefficients: np.ndarray,
    unscaled_covariance: np.ndarray,
    timer: Timer,
) -> LinearParams:
    """Fitted values, residuals and sums of squares for a solved β."""
    X, y = design.X, design.y

    with timer.section('residuals'):
        fitted_values = X @ coefficients
        residuals = y - fitted_values

    with timer.section('statistics'):
        rss = float(residuals @ residuals)
        y_mean = np.mean(y)
        tss = float(np.sum((y - y_mean) ** 2))

    return LinearParams(
        coefficients=coefficients,
        residuals=residuals,
        fitted_values=fitted_values,
        rss=rss,
        tss=tss,
        rank=design.p,
        df_residual=design.n - design.p,
        unscaled_covariance=unscaled_covariance,
    )


class CPUNormalEquationsBackend:
    """
    CPU backend solving β = (X'X)⁻¹ X'y.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    Adequate at this problem's scale (p under ~30, n under ~400).
    """

    def __init__(self, pivot_tolerance: float = DEFAULT_CONFIG.pivot_tolerance):
        self._pivot_tolerance = pivot_tolerance

    @property
    def name(self) -> str:
        return 'cpu_normal_equations'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via the normal equations.

        Algorithm:
            1. Form X'X (p x p) and X'y (p,)
            2. Solve X'X β = X'y by pivoted Gaussian elimination
            3. Invert X'X by Gauss-Jordan for the coefficient covariance
            4. Compute residuals, fitted values and sums of squares

        Raises:
            SingularMatrixError: If a pivot falls below tolerance
        """
        timer = Timer()
        timer.start()

        with timer.section('gram'):
            XtX = design.XtX()
            Xty = design.Xty()

        with timer.section('solve'):
            elimination = gauss_solve(XtX, Xty, tol=self._pivot_tolerance)

        with timer.section('inverse'):
            inverse = gauss_jordan_inverse(XtX, tol=self._pivot_tolerance)

        params = _residual_params(design, elimination.solution, inverse.solution, timer)
        timer.stop()

        warnings: tuple[str, ...] = ()
        if elimination.min_pivot < NEAR_SINGULAR_FACTOR * elimination.threshold:
            warnings = (
                f"X'X is nearly singular: smallest pivot {elimination.min_pivot:.3e} "
                f"against tolerance {elimination.threshold:.3e}",
            )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': params.rank,
            'min_pivot': elimination.min_pivot,
            'pivot_threshold': elimination.threshold,
            'row_swaps': elimination.swaps,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings,
        )


class CPUQRBackend:
    """
    CPU backend using QR decomposition of X.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    def __init__(self, pivot_tolerance: float = DEFAULT_CONFIG.pivot_tolerance):
        # cond(X'X) = cond(X)², so the R diagonal is held to the square root
        self._rank_tolerance = float(np.sqrt(pivot_tolerance))

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Compute QR decomposition: X = QR
            2. Solve: β = R⁻¹ Q'y
            3. (X'X)⁻¹ = R⁻¹ R⁻ᵀ
            4. Compute residuals, fitted values and sums of squares

        Raises:
            SingularMatrixError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()

        with timer.section('solve'):
            coefficients, qr_result = qr_solve_cpu(
                design.X, design.y, rtol=self._rank_tolerance
            )

        with timer.section('inverse'):
            unscaled = qr_unscaled_covariance(qr_result.R)

        params = _residual_params(design, coefficients, unscaled, timer)
        timer.stop()

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'rank_tolerance': qr_result.tol,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
