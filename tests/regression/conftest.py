"""
Regression test configuration.

Fixtures build RegressionInput values from day-major rows, the way a
person reads a habit log, and convert them to the column-major layout
the engine consumes.
"""

import numpy as np
import pytest

from habitstats.regression import RegressionInput


def column_major(rows):
    """Flatten day-major rows into a column-major feature buffer."""
    matrix = np.asarray(rows, dtype=np.float64)
    return tuple(float(v) for v in matrix.T.ravel())


@pytest.fixture
def make_input():
    """Factory: RegressionInput from rows, with rates from the column means."""
    def _make(names, rows, target, emojis=None, rates=None):
        if emojis is None:
            emojis = tuple("•" for _ in names)
        matrix = np.asarray(rows, dtype=np.float64).reshape(-1, len(names))
        if rates is None:
            rates = tuple(float(v) for v in matrix.mean(axis=0)) if len(matrix) else (0.0,) * len(names)
        return RegressionInput(
            habit_names=tuple(names),
            habit_emojis=tuple(emojis),
            feature_matrix=column_major(matrix),
            target_vector=tuple(float(v) for v in target),
            completion_rates=tuple(rates),
        )
    return _make


@pytest.fixture
def meditation_input():
    """30 days; sentiment is +0.5 on meditation days and -0.2 otherwise."""
    rows, target = [], []
    for i in range(30):
        meditation = 1.0 if i % 2 == 0 else 0.0
        reading = 1.0 if i % 3 == 0 else 0.0
        rows.append([meditation, reading])
        target.append(0.5 if meditation == 1.0 else -0.2)
    return RegressionInput(
        habit_names=("Meditation", "Reading"),
        habit_emojis=("🧘", "📖"),
        feature_matrix=column_major(rows),
        target_vector=tuple(target),
        completion_rates=(0.5, 0.33),
    )


@pytest.fixture
def alcohol_input():
    """20 days; alcohol costs 0.5 sentiment, exercise adds 0.2."""
    rows, target = [], []
    for i in range(20):
        exercise = 1.0 if i % 2 == 0 else 0.0
        alcohol = 1.0 if i % 3 == 0 else 0.0
        rows.append([exercise, alcohol])
        target.append(0.3 + exercise * 0.2 - alcohol * 0.5)
    return RegressionInput(
        habit_names=("Exercise", "Alcohol"),
        habit_emojis=("💪", "🍺"),
        feature_matrix=column_major(rows),
        target_vector=tuple(target),
        completion_rates=(0.5, 0.33),
    )


@pytest.fixture
def noisy_input(rng):
    """60 days, four habits with known effects plus Gaussian noise."""
    n = 60
    names = ("Meditation", "Exercise", "Alcohol", "Reading")
    X = (rng.random((n, 4)) < [0.5, 0.4, 0.3, 0.6]).astype(np.float64)
    effects = np.array([0.4, 0.25, -0.35, 0.0])
    y = 0.1 + X @ effects + rng.standard_normal(n) * 0.1
    return RegressionInput(
        habit_names=names,
        habit_emojis=("🧘", "💪", "🍺", "📖"),
        feature_matrix=column_major(X),
        target_vector=tuple(float(v) for v in y),
        completion_rates=tuple(float(v) for v in X.mean(axis=0)),
    ), X, y
