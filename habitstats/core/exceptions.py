"""
Exception hierarchy for habitstats.

All exceptions inherit from HabitStatsError so callers can catch any
library-specific error in one place. Each class carries a short, stable
``reason`` tag that identifies the failure without parsing the message.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class HabitStatsError(Exception):
    """Base exception for all habitstats errors."""

    reason = 'error'


class ValidationError(HabitStatsError):
    """
    Input validation failed.

    Raised when caller-provided inputs fail validation checks.
    """

    reason = 'invalid_input'


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when the flat feature matrix does not match the declared
    observation and habit counts, or when parallel sequences differ
    in length.
    """

    reason = 'dimension_mismatch'


class InsufficientDataError(ValidationError):
    """
    Input is well-formed but too sparse to support inference.
    """

    reason = 'insufficient_data'


class InsufficientObservationsError(InsufficientDataError):
    """
    Fewer observed days than the minimum window.

    Attributes:
        n_observations: Number of days supplied
        minimum: Minimum number of days required
    """

    reason = 'insufficient_observations'

    def __init__(self, message: str, n_observations: int, minimum: int):
        super().__init__(message)
        self.n_observations = n_observations
        self.minimum = minimum


class InsufficientVarianceError(InsufficientDataError):
    """
    Too few habit columns vary across the window.

    Attributes:
        n_varying: Number of non-degenerate habit columns
        minimum: Minimum number of varying columns required
        degenerate: Names of the habits that never (or always) completed
    """

    reason = 'insufficient_variance'

    def __init__(
        self,
        message: str,
        n_varying: int,
        minimum: int,
        degenerate: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.n_varying = n_varying
        self.minimum = minimum
        self.degenerate = degenerate


class NumericalError(HabitStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """

    reason = 'numerical_error'


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or numerically ill-conditioned.

    Raised when elimination meets a pivot below tolerance, or when the
    numerical rank of a factorization falls short of full column rank.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot: Magnitude of the offending pivot, if known
        tolerance: Absolute tolerance the pivot was compared against
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of columns)
    """

    reason = 'singular_matrix'

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot: float | None = None,
        tolerance: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot = pivot
        self.tolerance = tolerance
        self.rank = rank
        self.expected_rank = expected_rank


class DegreesOfFreedomError(NumericalError):
    """
    No residual degrees of freedom remain.

    Attributes:
        df_residual: n - (number of estimated parameters)
    """

    reason = 'degenerate_df'

    def __init__(self, message: str, df_residual: int):
        super().__init__(message)
        self.df_residual = df_residual
