"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d: dimensionality checks
    - check_consistent_length: multi-sequence length matching
    - check_flat_size: column-major buffer size
    - check_unit_interval: values in [0, 1]
    - check_nonempty_labels: habit label sequences
"""

import numpy as np
import pytest

from habitstats.core.exceptions import DimensionError, ValidationError
from habitstats.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_flat_size,
    check_ndim,
    check_nonempty_labels,
    check_unit_interval,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to float64 ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 0, 1], "feature_matrix")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 0.0, 1.0])

    def test_tuple_input(self):
        result = check_array((0.5, -0.2), "target_vector")
        np.testing.assert_array_equal(result, [0.5, -0.2])

    def test_bool_promoted_to_float(self):
        result = check_array([True, False, True], "feature_matrix")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 0.0, 1.0])

    def test_float32_promoted(self):
        result = check_array(np.array([1.0, 2.0], dtype=np.float32), "x")
        assert result.dtype == np.float64

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "target_vector")

    def test_mixed_types_rejected(self):
        with pytest.raises(ValidationError, match="target_vector"):
            check_array([1.0, "two", None], "target_vector")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1.0, 2.0], [3.0]], "feature_matrix")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([0.0, 1.0, -0.5]), "y")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([0.0, np.nan]), "y")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="2 Inf"):
            check_finite(np.array([np.inf, -np.inf, 1.0]), "y")


# ═══════════════════════════════════════════════════════════════════════
# check_ndim / check_1d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "y")

    def test_2d_rejected_as_1d(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((3, 2)), "y")

    def test_ndim_exact(self):
        check_ndim(np.zeros((2, 2)), 2, "X")
        with pytest.raises(DimensionError):
            check_ndim(np.zeros(2), 2, "X")


# ═══════════════════════════════════════════════════════════════════════
# check_consistent_length
# ═══════════════════════════════════════════════════════════════════════


class TestCheckConsistentLength:

    def test_matching_sequences(self):
        check_consistent_length(("A", "B"), ("🅰️", "🅱️"), np.array([0.5, 0.3]),
                                names=("names", "emojis", "rates"))

    def test_mismatch_reports_lengths(self):
        with pytest.raises(DimensionError, match="names=2, emojis=1"):
            check_consistent_length(("A", "B"), ("🅰️",), names=("names", "emojis"))

    def test_single_sequence_passes(self):
        check_consistent_length(("A",), names=("names",))

    def test_names_count_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(("A",), ("B",), names=("only_one",))


# ═══════════════════════════════════════════════════════════════════════
# check_flat_size / check_unit_interval / check_nonempty_labels
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFlatSize:

    def test_exact_size(self):
        check_flat_size(np.zeros(40), 20, 2, "feature_matrix")

    def test_wrong_size(self):
        with pytest.raises(DimensionError, match="expected 40 values"):
            check_flat_size(np.zeros(39), 20, 2, "feature_matrix")


class TestCheckUnitInterval:

    def test_bounds_inclusive(self):
        check_unit_interval(np.array([0.0, 0.33, 1.0]), "completion_rates")

    def test_outside_rejected(self):
        with pytest.raises(ValidationError, match=r"positions \[1, 2\]"):
            check_unit_interval(np.array([0.5, 1.2, -0.1]), "completion_rates")


class TestCheckNonemptyLabels:

    def test_labels_pass(self):
        check_nonempty_labels(("Meditation", "Reading"), "habit_names")

    def test_empty_rejected(self):
        with pytest.raises(DimensionError, match="at least one"):
            check_nonempty_labels((), "habit_names")

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError, match=r"positions \[1\]"):
            check_nonempty_labels(("Meditation", 3), "habit_names")
