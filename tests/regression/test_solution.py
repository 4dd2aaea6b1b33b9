"""
Tests for regression solution types.

Validates:
    - Direction classification and its dead zone
    - HabitCoefficient identity and serialization
    - RegressionOutput helpers: force multiplier, detractor, lookups
    - summary() / to_dict() / repr
    - RegressionConfig range validation
"""

from dataclasses import FrozenInstanceError

import pytest

from habitstats.core.exceptions import ValidationError
from habitstats.regression import (
    DEFAULT_CONFIG,
    Direction,
    HabitCoefficient,
    RegressionConfig,
    RegressionOutput,
)


def _coef(name, beta, p=0.01, emoji="•", rate=0.5, threshold=0.01):
    return HabitCoefficient(
        habit_name=name,
        habit_emoji=emoji,
        coefficient=beta,
        p_value=p,
        completion_rate=rate,
        direction=Direction.classify(beta, threshold),
        standard_error=0.1,
        t_statistic=beta / 0.1,
    )


def _output(*coefficients, **overrides):
    fields = dict(
        coefficients=tuple(coefficients),
        r2=0.6,
        intercept=0.05,
        adjusted_r2=0.55,
        df_residual=27,
        n_observations=30,
        backend_name='cpu_normal_equations',
    )
    fields.update(overrides)
    return RegressionOutput(**fields)


# ═══════════════════════════════════════════════════════════════════════
# Direction
# ═══════════════════════════════════════════════════════════════════════


class TestDirection:

    def test_positive(self):
        assert Direction.classify(0.3, 0.01) is Direction.POSITIVE

    def test_negative(self):
        assert Direction.classify(-0.3, 0.01) is Direction.NEGATIVE

    def test_dead_zone(self):
        assert Direction.classify(0.005, 0.01) is Direction.NEUTRAL
        assert Direction.classify(-0.005, 0.01) is Direction.NEUTRAL
        assert Direction.classify(0.0, 0.01) is Direction.NEUTRAL

    def test_boundary_is_neutral(self):
        assert Direction.classify(0.01, 0.01) is Direction.NEUTRAL
        assert Direction.classify(-0.01, 0.01) is Direction.NEUTRAL

    def test_zero_threshold(self):
        assert Direction.classify(1e-9, 0.0) is Direction.POSITIVE
        assert Direction.classify(0.0, 0.0) is Direction.NEUTRAL

    def test_string_values(self):
        assert Direction.POSITIVE == 'positive'
        assert Direction('negative') is Direction.NEGATIVE


# ═══════════════════════════════════════════════════════════════════════
# HabitCoefficient
# ═══════════════════════════════════════════════════════════════════════


class TestHabitCoefficient:

    def test_id_is_name(self):
        assert _coef("Meditation", 0.4).id == "Meditation"

    def test_significance(self):
        c = _coef("Meditation", 0.4, p=0.03)
        assert c.is_significant()
        assert not c.is_significant(0.01)

    def test_to_dict(self):
        d = _coef("Alcohol", -0.5, p=0.2, emoji="🍺", rate=0.33).to_dict()
        assert d == {
            'habit_name': "Alcohol",
            'habit_emoji': "🍺",
            'coefficient': -0.5,
            'p_value': 0.2,
            'completion_rate': 0.33,
            'direction': 'negative',
            'standard_error': 0.1,
            't_statistic': pytest.approx(-5.0),
        }

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            _coef("A", 0.1).coefficient = 0.2


# ═══════════════════════════════════════════════════════════════════════
# RegressionOutput helpers
# ═══════════════════════════════════════════════════════════════════════


class TestForceMultiplier:

    def test_largest_positive(self):
        out = _output(_coef("A", 0.2), _coef("B", 0.6), _coef("C", -0.9))
        assert out.force_multiplier().habit_name == "B"

    def test_none_when_no_positive(self):
        out = _output(_coef("A", -0.2), _coef("B", 0.001))
        assert out.force_multiplier() is None

    def test_tie_goes_to_first(self):
        out = _output(_coef("A", 0.4), _coef("B", 0.4))
        assert out.force_multiplier().habit_name == "A"

    def test_alpha_filters(self):
        out = _output(_coef("A", 0.2, p=0.01), _coef("B", 0.6, p=0.4))
        assert out.force_multiplier().habit_name == "B"
        assert out.force_multiplier(alpha=0.05).habit_name == "A"
        assert out.force_multiplier(alpha=0.001) is None

    def test_empty(self):
        assert _output().force_multiplier() is None


class TestOutputLookups:

    def test_detractor(self):
        out = _output(_coef("A", -0.2), _coef("B", -0.7), _coef("C", 0.9))
        assert out.detractor().habit_name == "B"

    def test_detractor_none(self):
        assert _output(_coef("A", 0.3)).detractor() is None

    def test_coefficient_for(self):
        out = _output(_coef("A", 0.1), _coef("B", 0.2))
        assert out.coefficient_for("B").coefficient == 0.2
        assert out.coefficient_for("missing") is None

    def test_significant_uses_configured_level(self):
        out = _output(_coef("A", 0.3, p=0.03), _coef("B", 0.3, p=0.2))
        assert [c.habit_name for c in out.significant()] == ["A"]
        assert out.significant(0.5) == out.coefficients

        strict = _output(_coef("A", 0.3, p=0.03), significance_level=0.01)
        assert strict.significant() == ()


class TestOutputPresentation:

    def test_to_dict(self):
        out = _output(_coef("A", 0.3), dropped_habits=("Z",))
        d = out.to_dict()
        assert d['r2'] == 0.6
        assert d['intercept'] == 0.05
        assert d['n_observations'] == 30
        assert d['dropped_habits'] == ["Z"]
        assert d['coefficients'][0]['habit_name'] == "A"

    def test_summary(self):
        out = _output(
            _coef("Meditation", 0.6, emoji="🧘"),
            _coef("Alcohol", -0.4, p=0.3, emoji="🍺"),
            dropped_habits=("Flossing",),
            timing={'total_seconds': 0.002},
        )
        text = out.summary()
        assert "Habit Regression Results" in text
        assert "Observations: 30" in text
        assert "(Intercept)" in text
        assert "🧘 Meditation" in text
        assert "negative" in text
        assert "Force multiplier: Meditation" in text
        assert "Excluded (no variance): Flossing" in text
        assert "Backend: cpu_normal_equations" in text
        assert "Time:" in text

    def test_summary_without_force_multiplier(self):
        text = _output(_coef("A", -0.4)).summary()
        assert "Force multiplier: none identified" in text
        assert "Excluded" not in text

    def test_repr(self):
        out = _output(_coef("A", 0.3), _coef("B", 0.1))
        assert repr(out) == "RegressionOutput(n=30, habits=2, r2=0.6000)"

    def test_equality_ignores_timing(self):
        a = _output(_coef("A", 0.3), timing={'total_seconds': 0.1})
        b = _output(_coef("A", 0.3), timing={'total_seconds': 0.9})
        assert a == b

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            _output().r2 = 1.0


# ═══════════════════════════════════════════════════════════════════════
# RegressionConfig
# ═══════════════════════════════════════════════════════════════════════


class TestRegressionConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG.min_observations == 14
        assert DEFAULT_CONFIG.min_varying_habits == 2
        assert DEFAULT_CONFIG.variance_epsilon == 1e-6
        assert DEFAULT_CONFIG.pivot_tolerance == 1e-10
        assert DEFAULT_CONFIG.direction_threshold == 0.01
        assert DEFAULT_CONFIG.significance_level == 0.05

    @pytest.mark.parametrize("kwargs", [
        {'min_observations': 0},
        {'min_varying_habits': 0},
        {'variance_epsilon': -1e-6},
        {'variance_epsilon': 0.5},
        {'pivot_tolerance': 0.0},
        {'pivot_tolerance': 1.0},
        {'direction_threshold': -0.1},
        {'significance_level': 0.0},
        {'significance_level': 1.0},
    ])
    def test_out_of_range(self, kwargs):
        with pytest.raises(ValidationError):
            RegressionConfig(**kwargs)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.min_observations = 7
