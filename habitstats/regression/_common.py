"""
Common types for habit regression.

Defines the tunable thresholds (RegressionConfig) and the Direction enum
used to label each habit's effect.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from habitstats.core.exceptions import ValidationError


class Direction(str, Enum):
    """Sign of a habit's estimated effect on sentiment."""
    POSITIVE = 'positive'
    NEGATIVE = 'negative'
    NEUTRAL = 'neutral'

    @classmethod
    def classify(cls, coefficient: float, threshold: float) -> Direction:
        """Label a coefficient, treating |β| <= threshold as neutral."""
        if coefficient > threshold:
            return cls.POSITIVE
        if coefficient < -threshold:
            return cls.NEGATIVE
        return cls.NEUTRAL


@dataclass(frozen=True)
class RegressionConfig:
    """
    Thresholds governing when a regression is attempted and how it is read.

    Attributes:
        min_observations: Fewest days a fit is attempted on. Below two
            weeks, day-of-week effects swamp any habit signal.
        min_varying_habits: Fewest non-degenerate habit columns required.
        variance_epsilon: A column is degenerate unless its mean lies in
            (ε, 1 - ε) and its range exceeds ε.
        pivot_tolerance: Elimination pivot floor, relative to max|X'X|.
        direction_threshold: Dead zone around zero for Direction.NEUTRAL.
        significance_level: Default alpha for significance helpers.
    """
    min_observations: int = 14
    min_varying_habits: int = 2
    variance_epsilon: float = 1e-6
    pivot_tolerance: float = 1e-10
    direction_threshold: float = 0.01
    significance_level: float = 0.05

    def __post_init__(self):
        if self.min_observations < 1:
            raise ValidationError(
                f"min_observations must be >= 1, got {self.min_observations}"
            )
        if self.min_varying_habits < 1:
            raise ValidationError(
                f"min_varying_habits must be >= 1, got {self.min_varying_habits}"
            )
        if not (0.0 <= self.variance_epsilon < 0.5):
            raise ValidationError(
                f"variance_epsilon must be in [0, 0.5), got {self.variance_epsilon}"
            )
        if not (0.0 < self.pivot_tolerance < 1.0):
            raise ValidationError(
                f"pivot_tolerance must be in (0, 1), got {self.pivot_tolerance}"
            )
        if self.direction_threshold < 0.0:
            raise ValidationError(
                f"direction_threshold must be >= 0, got {self.direction_threshold}"
            )
        if not (0.0 < self.significance_level < 1.0):
            raise ValidationError(
                f"significance_level must be in (0, 1), got {self.significance_level}"
            )


DEFAULT_CONFIG = RegressionConfig()
