"""
Regression solution types.

Contains the backend parameter payload, the per-habit coefficient
record, and the user-facing RegressionOutput that packages them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from habitstats.regression._common import Direction, RegressionConfig

if TYPE_CHECKING:
    from habitstats.core.result import Result
    from habitstats.regression._inference import InferenceParams
    from habitstats.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for an OLS fit.

    This is the immutable data computed by backends. Index 0 of
    coefficients is the intercept.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rank: int
    df_residual: int
    unscaled_covariance: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class HabitCoefficient:
    """
    Estimated effect of one habit on daily sentiment.

    The identity key is habit_name. standard_error and t_statistic are
    always finite; a zero standard error is reported with t_statistic 0
    and p_value 1.
    """
    habit_name: str
    habit_emoji: str
    coefficient: float
    p_value: float
    completion_rate: float
    direction: Direction
    standard_error: float = 0.0
    t_statistic: float = 0.0

    @property
    def id(self) -> str:
        return self.habit_name

    def is_significant(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha

    def to_dict(self) -> dict[str, Any]:
        return {
            'habit_name': self.habit_name,
            'habit_emoji': self.habit_emoji,
            'coefficient': self.coefficient,
            'p_value': self.p_value,
            'completion_rate': self.completion_rate,
            'direction': self.direction.value,
            'standard_error': self.standard_error,
            't_statistic': self.t_statistic,
        }


def classify_coefficients(
    design: RegressionDesign,
    params: LinearParams,
    inference: InferenceParams,
    config: RegressionConfig,
) -> tuple[HabitCoefficient, ...]:
    """
    One HabitCoefficient per retained habit, intercept excluded.

    Order follows the design's retained columns, which is input order.
    """
    coefficients = []
    for j, name in enumerate(design.habit_names):
        i = j + 1  # skip intercept
        beta = float(params.coefficients[i])
        coefficients.append(HabitCoefficient(
            habit_name=name,
            habit_emoji=design.habit_emojis[j],
            coefficient=beta,
            p_value=float(inference.p_values[i]),
            completion_rate=design.completion_rates[j],
            direction=Direction.classify(beta, config.direction_threshold),
            standard_error=float(inference.standard_errors[i]),
            t_statistic=float(inference.t_statistics[i]),
        ))
    return tuple(coefficients)


@dataclass(frozen=True)
class RegressionOutput:
    """
    User-facing regression results.

    Immutable and freshly built per call. Timing is diagnostic only and
    does not take part in equality, so two fits of the same input compare
    equal.
    """
    coefficients: tuple[HabitCoefficient, ...]
    r2: float
    intercept: float
    adjusted_r2: float
    df_residual: int
    n_observations: int
    dropped_habits: tuple[str, ...] = ()
    backend_name: str = ''
    warnings: tuple[str, ...] = ()
    significance_level: float = 0.05
    timing: dict[str, float] | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_result(
        cls,
        result: Result[LinearParams],
        design: RegressionDesign,
        inference: InferenceParams,
        config: RegressionConfig,
        warnings: tuple[str, ...] = (),
        timing: dict[str, float] | None = None,
    ) -> RegressionOutput:
        """Package a backend result and its inference into an output."""
        params = result.params
        return cls(
            coefficients=classify_coefficients(design, params, inference, config),
            r2=inference.r_squared,
            intercept=float(params.coefficients[0]),
            adjusted_r2=inference.adjusted_r_squared,
            df_residual=inference.df_residual,
            n_observations=design.n,
            dropped_habits=design.dropped_habits,
            backend_name=result.backend_name,
            warnings=warnings + result.warnings,
            significance_level=config.significance_level,
            timing=timing,
        )

    def coefficient_for(self, habit_name: str) -> HabitCoefficient | None:
        for coeff in self.coefficients:
            if coeff.habit_name == habit_name:
                return coeff
        return None

    def force_multiplier(self, alpha: float | None = None) -> HabitCoefficient | None:
        """
        The habit with the largest positive effect on sentiment.

        Only habits classified POSITIVE qualify. With alpha given, the
        coefficient must also be significant at that level. Ties go to
        the habit that comes first in input order.
        """
        candidates = [
            c for c in self.coefficients
            if c.direction is Direction.POSITIVE
            and (alpha is None or c.is_significant(alpha))
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda c: c.coefficient)

    def detractor(self, alpha: float | None = None) -> HabitCoefficient | None:
        """The habit with the largest negative effect on sentiment."""
        candidates = [
            c for c in self.coefficients
            if c.direction is Direction.NEGATIVE
            and (alpha is None or c.is_significant(alpha))
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda c: c.coefficient)

    def significant(self, alpha: float | None = None) -> tuple[HabitCoefficient, ...]:
        """Coefficients with p_value < alpha (default significance_level), in input order."""
        if alpha is None:
            alpha = self.significance_level
        return tuple(c for c in self.coefficients if c.is_significant(alpha))

    def to_dict(self) -> dict[str, Any]:
        return {
            'r2': self.r2,
            'adjusted_r2': self.adjusted_r2,
            'intercept': self.intercept,
            'df_residual': self.df_residual,
            'n_observations': self.n_observations,
            'coefficients': [c.to_dict() for c in self.coefficients],
            'dropped_habits': list(self.dropped_habits),
        }

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Habit Regression Results",
            "=" * 72,
            f"Observations: {self.n_observations}",
            f"Habits: {len(self.coefficients)}",
            f"R-squared: {self.r2:.6f}",
            f"Adj. R-squared: {self.adjusted_r2:.6f}",
            f"Residual DF: {self.df_residual}",
            "",
            "Coefficients:",
            "-" * 72,
            f"{'Habit':<20} {'Estimate':>12} {'Std.Error':>12} {'t value':>10} "
            f"{'Pr(>|t|)':>10}   Direction",
            "-" * 72,
            f"{'(Intercept)':<20} {self.intercept:12.6f}",
        ]

        for c in self.coefficients:
            label = f"{c.habit_emoji} {c.habit_name}".strip()
            mark = "*" if c.is_significant(self.significance_level) else ""
            lines.append(
                f"{label:<20} {c.coefficient:12.6f} {c.standard_error:12.6f} "
                f"{c.t_statistic:10.3f} {c.p_value:10.4f} {mark:1} {c.direction.value}"
            )

        lines.append("-" * 72)
        lines.append(f"* p < {self.significance_level:g}")
        if self.dropped_habits:
            lines.append(f"Excluded (no variance): {', '.join(self.dropped_habits)}")
        best = self.force_multiplier()
        lines.append(f"Force multiplier: {best.habit_name if best else 'none identified'}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RegressionOutput(n={self.n_observations}, habits={len(self.coefficients)}, "
            f"r2={self.r2:.4f})"
        )
