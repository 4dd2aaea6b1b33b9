"""
Coefficient inference for OLS fits.

Turns a backend's LinearParams into standard errors, t-statistics and
two-tailed p-values, plus R² and adjusted R². Every division site is
guarded: a zero standard error means "no evidence" (t = 0, p = 1), and a
zero total sum of squares gives R² = 0. No NaN leaves this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from habitstats.core.exceptions import DegreesOfFreedomError
from habitstats.regression.solution import LinearParams

# Sentiment scores live in [-1, 1]; a total sum of squares below this is
# rounding noise around a constant response
TSS_FLOOR = 1e-12


@dataclass(frozen=True)
class InferenceParams:
    """
    Per-coefficient inference, intercept at index 0.

    Attributes:
        standard_errors: sqrt(σ² [(X'X)⁻¹]_ii), 0 where undefined
        t_statistics: β_i / se_i, 0 where se_i is 0
        p_values: Two-tailed p-values in [0, 1]
        sigma_squared: Residual variance RSS / df
        r_squared: Coefficient of determination, clamped to [0, 1]
        adjusted_r_squared: Adjusted R², clamped to [0, 1]
        df_residual: n - p
    """
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    sigma_squared: float
    r_squared: float
    adjusted_r_squared: float
    df_residual: int


def r_squared(rss: float, tss: float) -> float:
    """1 - RSS/TSS clamped to [0, 1]; 0 when the response is constant."""
    if not np.isfinite(tss) or tss <= TSS_FLOOR:
        return 0.0
    return float(np.clip(1.0 - rss / tss, 0.0, 1.0))


def adjusted_r_squared(r2: float, n: int, df_residual: int) -> float:
    """1 - (1 - R²)(n - 1)/df clamped to [0, 1]."""
    if df_residual <= 0:
        return r2
    return float(np.clip(1.0 - (1.0 - r2) * (n - 1) / df_residual, 0.0, 1.0))


def coefficient_tests(
    coefficients: NDArray[np.floating[Any]],
    unscaled_covariance: NDArray[np.floating[Any]],
    sigma_squared: float,
    df_residual: int,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Standard errors, t-statistics and two-tailed p-values.

    Args:
        coefficients: β (p,)
        unscaled_covariance: (X'X)⁻¹ (p x p)
        sigma_squared: Residual variance
        df_residual: Degrees of freedom for the t distribution

    Returns:
        (standard_errors, t_statistics, p_values), each (p,)
    """
    variances = sigma_squared * np.diag(unscaled_covariance)
    usable = np.isfinite(variances) & (variances > 0.0)

    se = np.sqrt(np.where(usable, variances, 0.0))
    usable &= se > 0.0

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        t = np.where(usable, coefficients / np.where(usable, se, 1.0), 0.0)
    t = np.nan_to_num(t, nan=0.0)

    # 2 * sf(|t|) == 2 * (1 - cdf(|t|)) without cancellation in the tail
    p = np.where(usable, 2.0 * stats.t.sf(np.abs(t), df_residual), 1.0)
    p = np.clip(np.nan_to_num(p, nan=1.0), 0.0, 1.0)

    return se, t, p


def infer(params: LinearParams, n: int) -> InferenceParams:
    """
    Full inference for a fitted model.

    Raises:
        DegreesOfFreedomError: If no residual degrees of freedom remain
    """
    df = params.df_residual
    if df <= 0:
        raise DegreesOfFreedomError(
            f"No residual degrees of freedom: n={n}, parameters={n - df}",
            df_residual=df,
        )

    sigma_squared = params.rss / df
    se, t, p = coefficient_tests(
        params.coefficients, params.unscaled_covariance, sigma_squared, df
    )
    r2 = r_squared(params.rss, params.tss)

    return InferenceParams(
        standard_errors=se,
        t_statistics=t,
        p_values=p,
        sigma_squared=float(sigma_squared),
        r_squared=r2,
        adjusted_r_squared=adjusted_r_squared(r2, n, df),
        df_residual=df,
    )
