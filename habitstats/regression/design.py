"""
Regression Design.

RegressionInput is what the caller hands over: habit labels, a flat
column-major completion matrix and the daily sentiment scores.
RegressionDesign turns it into the numeric problem: it validates the
shapes, screens out habits that never vary, and prepends the intercept
column. Nothing here solves anything.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from habitstats.core.exceptions import (
    DimensionError,
    InsufficientObservationsError,
    InsufficientVarianceError,
    ValidationError,
)
from habitstats.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_flat_size,
    check_nonempty_labels,
    check_unit_interval,
)
from habitstats.regression._common import DEFAULT_CONFIG, RegressionConfig

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class RegressionInput:
    """
    Daily habit completion and sentiment, ready for regression.

    Attributes:
        habit_names: Habit names in column order
        habit_emojis: Display emoji per habit, parallel to habit_names
        feature_matrix: observations x habits, flat and column-major:
            element [row, col] is feature_matrix[col * n + row]. Values
            are 1.0 (completed that day) or 0.0.
        target_vector: Sentiment score per day, length n
        completion_rates: Fraction of observed days each habit was
            completed, one per habit
    """
    habit_names: Sequence[str]
    habit_emojis: Sequence[str]
    feature_matrix: Sequence[float]
    target_vector: Sequence[float]
    completion_rates: Sequence[float]

    @property
    def observation_count(self) -> int:
        """Number of observations (days)."""
        return len(self.target_vector)

    @property
    def feature_count(self) -> int:
        """Number of features (habits)."""
        return len(self.habit_names)

    @classmethod
    def from_rows(
        cls,
        habit_names: Sequence[str],
        habit_emojis: Sequence[str],
        rows: Sequence[Sequence[float]],
        target_vector: Sequence[float],
        completion_rates: Sequence[float] | None = None,
    ) -> RegressionInput:
        """
        Build an input from day-major rows (one row of habit values per day).

        If completion_rates is omitted, each habit's rate is the mean of
        its column.
        """
        k = len(habit_names)
        matrix = np.asarray(rows, dtype=np.float64).reshape(-1, k)
        if completion_rates is None:
            if matrix.shape[0] > 0:
                completion_rates = tuple(float(v) for v in matrix.mean(axis=0))
            else:
                completion_rates = (0.0,) * k
        return cls(
            habit_names=tuple(habit_names),
            habit_emojis=tuple(habit_emojis),
            feature_matrix=tuple(float(v) for v in matrix.T.ravel()),
            target_vector=tuple(float(v) for v in target_vector),
            completion_rates=tuple(float(v) for v in completion_rates),
        )

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        target: str = 'sentiment',
        habit_emojis: Sequence[str] | None = None,
    ) -> RegressionInput:
        """
        Construct from a pandas DataFrame with one row per day.

        Every column other than target is a habit column, in frame order.
        Emojis default to empty strings.
        """
        if target not in df.columns:
            raise ValidationError(
                f"target column {target!r} not found; columns: {list(df.columns)}"
            )
        habit_columns = [c for c in df.columns if c != target]
        if not habit_columns:
            raise DimensionError("DataFrame has no habit columns besides the target")
        if habit_emojis is None:
            habit_emojis = ('',) * len(habit_columns)

        return cls.from_rows(
            [str(c) for c in habit_columns],
            habit_emojis,
            df[habit_columns].to_numpy(dtype=np.float64),
            df[target].to_numpy(dtype=np.float64),
        )


def varying_columns(
    columns: NDArray[np.floating[Any]],
    epsilon: float,
) -> NDArray[np.bool_]:
    """
    Mask of habit columns that vary across the window.

    A column is degenerate when its mean is within epsilon of 0 or 1
    (never or always completed) or when it is constant. A degenerate
    column is collinear with the intercept.

    Args:
        columns: k x n array, one row per habit column
        epsilon: Degeneracy threshold

    Returns:
        Boolean mask of length k
    """
    if columns.shape[1] == 0:
        return np.zeros(columns.shape[0], dtype=bool)
    means = columns.mean(axis=1)
    spans = np.ptp(columns, axis=1)
    return (means > epsilon) & (means < 1.0 - epsilon) & (spans > epsilon)


@dataclass(frozen=True)
class RegressionDesign:
    """
    Validated regression problem.

    X is n x (k'+1): a column of ones followed by the k' retained habit
    columns in input order. Immutable after construction; build() never
    mutates the RegressionInput it reads.

    Construction:
        RegressionDesign.build(regression_input)
        RegressionDesign.build(regression_input, config)
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _retained: tuple[int, ...]
    _habit_names: tuple[str, ...]
    _habit_emojis: tuple[str, ...]
    _completion_rates: tuple[float, ...]
    _dropped: tuple[str, ...]

    @classmethod
    def build(
        cls,
        regression_input: RegressionInput,
        config: RegressionConfig = DEFAULT_CONFIG,
    ) -> RegressionDesign:
        """
        Validate the input, screen degenerate habits and assemble X, y.

        Raises:
            DimensionError: If labels, rates and matrix sizes disagree
            ValidationError: If values are non-numeric, non-finite, or
                completion rates fall outside [0, 1]
            InsufficientObservationsError: If n < config.min_observations
            InsufficientVarianceError: If fewer than
                config.min_varying_habits columns vary
        """
        names = tuple(regression_input.habit_names)
        emojis = tuple(regression_input.habit_emojis)

        check_nonempty_labels(names, 'habit_names')
        check_consistent_length(
            names, emojis, regression_input.completion_rates,
            names=('habit_names', 'habit_emojis', 'completion_rates'),
        )

        y = check_array(regression_input.target_vector, 'target_vector')
        check_1d(y, 'target_vector')
        n = y.shape[0]
        k = len(names)

        if n < config.min_observations:
            raise InsufficientObservationsError(
                f"target_vector: requires at least {config.min_observations} "
                f"observations, got {n}",
                n_observations=n,
                minimum=config.min_observations,
            )
        check_finite(y, 'target_vector')

        flat = check_array(regression_input.feature_matrix, 'feature_matrix')
        check_1d(flat, 'feature_matrix')
        check_flat_size(flat, n, k, 'feature_matrix')
        check_finite(flat, 'feature_matrix')

        rates = check_array(regression_input.completion_rates, 'completion_rates')
        check_finite(rates, 'completion_rates')
        check_unit_interval(rates, 'completion_rates')

        # Column-major: row c of the reshape is habit column c
        columns = flat.reshape(k, n)
        mask = varying_columns(columns, config.variance_epsilon)
        retained = tuple(int(i) for i in np.flatnonzero(mask))
        dropped = tuple(names[i] for i in range(k) if not mask[i])

        if len(retained) < config.min_varying_habits:
            raise InsufficientVarianceError(
                f"feature_matrix: requires at least {config.min_varying_habits} "
                f"habits that vary across the window, got {len(retained)}",
                n_varying=len(retained),
                minimum=config.min_varying_habits,
                degenerate=dropped,
            )

        X = np.empty((n, len(retained) + 1), dtype=np.float64)
        X[:, 0] = 1.0
        X[:, 1:] = columns[list(retained)].T

        return cls(
            _X=X,
            _y=y.copy(),
            _n=n,
            _retained=retained,
            _habit_names=tuple(names[i] for i in retained),
            _habit_emojis=tuple(emojis[i] for i in retained),
            _completion_rates=tuple(float(rates[i]) for i in retained),
            _dropped=dropped,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix with intercept (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of estimated parameters, intercept included."""
        return self._X.shape[1]

    @property
    def df_residual(self) -> int:
        return self._n - self.p

    @property
    def retained_indices(self) -> tuple[int, ...]:
        """Input column indices kept in X, in input order."""
        return self._retained

    @property
    def habit_names(self) -> tuple[str, ...]:
        return self._habit_names

    @property
    def habit_emojis(self) -> tuple[str, ...]:
        return self._habit_emojis

    @property
    def completion_rates(self) -> tuple[float, ...]:
        return self._completion_rates

    @property
    def dropped_habits(self) -> tuple[str, ...]:
        """Habits excluded as degenerate, in input order."""
        return self._dropped

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute the Gram matrix X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
