"""
Core infrastructure for habitstats.

Shared abstractions and utilities used by the regression engine.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and linear algebra kernels
"""

from habitstats.core.protocols import Backend
from habitstats.core.result import Result
from habitstats.core.exceptions import (
    HabitStatsError,
    ValidationError,
    DimensionError,
    InsufficientDataError,
    InsufficientObservationsError,
    InsufficientVarianceError,
    NumericalError,
    SingularMatrixError,
    DegreesOfFreedomError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "HabitStatsError",
    "ValidationError",
    "DimensionError",
    "InsufficientDataError",
    "InsufficientObservationsError",
    "InsufficientVarianceError",
    "NumericalError",
    "SingularMatrixError",
    "DegreesOfFreedomError",
]
