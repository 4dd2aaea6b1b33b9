"""
habitstats: habit-to-mood regression for personal analytics.

Correlates daily habit completion with daily journal sentiment and
reports which habits move mood, with statistical confidence.

Submodules:
    regression: OLS of sentiment on habit completion
    core: Exceptions, validation, result envelope, linear algebra
"""

__version__ = "0.1.0"

from habitstats import regression
from habitstats.regression import (
    Direction,
    HabitCoefficient,
    RegressionInput,
    RegressionOutput,
    RegressionService,
    compute_regression,
    fit,
)

__all__ = [
    "__version__",
    "regression",
    "compute_regression",
    "fit",
    "RegressionService",
    "RegressionInput",
    "RegressionOutput",
    "HabitCoefficient",
    "Direction",
]
