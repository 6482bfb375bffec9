"""
Tests for input validators.
"""

import math

import numpy as np
import pytest

from pysurvlab.core.exceptions import (
    DimensionError,
    InvalidParameterError,
    ValidationError,
)
from pysurvlab.core.validation import (
    check_array,
    check_censoring_rate,
    check_consistent_length,
    check_count,
    check_finite,
    check_non_negative,
    check_positive,
    check_seed,
)


class TestCheckArray:

    def test_int_converted_to_float(self):
        out = check_array([1, 2, 3], "x")
        assert out.dtype == np.float64

    def test_bool_converted(self):
        out = check_array([True, False], "event")
        np.testing.assert_array_equal(out, [1.0, 0.0])

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "x")

    def test_mixed_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([1, "a", None], "x")


class TestArrayChecks:

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="NaN"):
            check_finite(np.array([1.0, np.nan]), "time")

    def test_inf_allowed(self):
        check_finite(np.array([1.0, np.inf]), "time")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            check_non_negative(np.array([1.0, -0.5]), "time")

    def test_inconsistent_lengths(self):
        with pytest.raises(DimensionError, match="time=2, event=3"):
            check_consistent_length(
                np.zeros(2), np.zeros(3), names=("time", "event"),
            )


class TestScalarChecks:

    def test_count_accepts_zero(self):
        assert check_count(0, "n") == 0

    @pytest.mark.parametrize("bad", [-1, 2.5, True, "3"])
    def test_count_rejects(self, bad):
        with pytest.raises(InvalidParameterError) as exc:
            check_count(bad, "n")
        assert exc.value.parameter == "n"

    @pytest.mark.parametrize("bad", [0, -0.1, math.inf, math.nan])
    def test_positive_rejects(self, bad):
        with pytest.raises(InvalidParameterError):
            check_positive(bad, "lam")

    def test_positive_returns_float(self):
        assert check_positive(2, "lam") == 2.0

    def test_censoring_rate_bounds(self):
        assert check_censoring_rate(0.0) == 0.0
        assert check_censoring_rate(0.99) == 0.99
        with pytest.raises(InvalidParameterError, match=r"\[0, 1\)"):
            check_censoring_rate(1.0)
        with pytest.raises(InvalidParameterError):
            check_censoring_rate(-0.1)

    def test_seed(self):
        assert check_seed(None) is None
        assert check_seed(np.int64(7)) == 7
        with pytest.raises(InvalidParameterError):
            check_seed(1.5)
