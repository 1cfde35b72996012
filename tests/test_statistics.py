"""
Unit tests for ceil_divide and standard deviation.

Run with: pytest tests/test_statistics.py -v
"""

import math

import pytest

from trial_aggregator.scoring.score import HardSoftScore, SimpleScore
from trial_aggregator.scoring.statistics import (
    ceil_divide,
    determine_standard_deviation,
    standard_deviation_string,
)

from .conftest import make_trial


class TestCeilDivide:
    """Tests for ceil_divide."""

    def test_values(self):
        """Rounds up, exact divisions unchanged."""
        assert ceil_divide(3, 2) == 2
        assert ceil_divide(4, 2) == 2
        assert ceil_divide(0, 5) == 0
        assert ceil_divide(5, 4) == 2

    def test_invalid_divisor(self):
        """Zero divisor is rejected."""
        with pytest.raises(ValueError):
            ceil_divide(1, 0)

    def test_negative_dividend(self):
        """Negative dividend is rejected."""
        with pytest.raises(ValueError):
            ceil_divide(-1, 2)


class TestStandardDeviation:
    """Tests for determine_standard_deviation."""

    def test_identical_scores(self):
        """Identical scores have zero spread on every level."""
        trials = [make_trial(i, HardSoftScore(-1, 20)) for i in range(3)]
        result = determine_standard_deviation(trials, HardSoftScore(-1, 20), 3)
        assert result == [0.0, 0.0]

    def test_population_std(self):
        """Divides by the success count, not n - 1."""
        trials = [make_trial(i, SimpleScore(v)) for i, v in enumerate([10, 20, 20, 30])]
        result = determine_standard_deviation(trials, SimpleScore(20), 4)
        assert result == pytest.approx([math.sqrt(50)])

    def test_levels_are_independent(self):
        """Each level gets its own spread."""
        trials = [make_trial(0, HardSoftScore(0, 10)), make_trial(1, HardSoftScore(-2, 10))]
        result = determine_standard_deviation(trials, HardSoftScore(-1, 10), 2)
        assert result == pytest.approx([1.0, 0.0])

    def test_no_successes(self):
        """Zero successes gives no standard deviation."""
        assert determine_standard_deviation([], None, 0) is None

    def test_large_scores_do_not_overflow(self):
        """Squares are computed on floats."""
        trials = [make_trial(0, SimpleScore(3_000_000_000)), make_trial(1, SimpleScore(-3_000_000_000))]
        result = determine_standard_deviation(trials, SimpleScore(0), 2)
        assert result == pytest.approx([3e9])


class TestStandardDeviationString:
    """Tests for standard_deviation_string."""

    def test_format(self):
        """Two decimals, exponent for very large or tiny values."""
        assert standard_deviation_string([0.0, 12.5]) == "0.00/12.50"
        assert standard_deviation_string([3e9]) == "3.00e+09"
        assert standard_deviation_string([0.0001]) == "1.00e-04"

    def test_none(self):
        """Undefined stays undefined."""
        assert standard_deviation_string(None) is None
