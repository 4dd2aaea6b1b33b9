"""
Habit-sentiment regression.

Ordinary least squares of daily sentiment on daily habit completion,
with per-habit two-tailed significance.

Public API:
    compute_regression(input, ...) -> RegressionOutput | None
    fit(input, ...) -> RegressionOutput  (raises the refusal reason)
    RegressionService(config, backend).compute_regression(input)

Example:
    >>> from habitstats.regression import RegressionInput, compute_regression
    >>> output = compute_regression(RegressionInput(...))
    >>> if output is not None:
    ...     print(output.force_multiplier())
"""

from habitstats.regression._common import DEFAULT_CONFIG, Direction, RegressionConfig
from habitstats.regression.design import RegressionDesign, RegressionInput
from habitstats.regression.solution import HabitCoefficient, LinearParams, RegressionOutput
from habitstats.regression.solvers import RegressionService, compute_regression, fit

__all__ = [
    "compute_regression",
    "fit",
    "RegressionService",
    "RegressionInput",
    "RegressionDesign",
    "RegressionOutput",
    "HabitCoefficient",
    "LinearParams",
    "Direction",
    "RegressionConfig",
    "DEFAULT_CONFIG",
]
