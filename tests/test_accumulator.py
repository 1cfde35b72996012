"""
Unit tests for trial accumulation.

Run with: pytest tests/test_accumulator.py -v
"""

import pytest

from trial_aggregator.aggregation.accumulator import accumulate_trials
from trial_aggregator.scoring.score import HardSoftScore, SimpleScore

from .conftest import make_trial


class TestAccumulateTrials:
    """Tests for accumulate_trials."""

    def test_totals_and_average(self, five_trial_scenario):
        """Failed trials are counted and excluded from the score totals."""
        stats = accumulate_trials(five_trial_scenario.trials)
        assert stats.failure_count == 1
        assert stats.success_count == 4
        assert stats.total_score == SimpleScore(80)
        assert stats.average_score == SimpleScore(20)
        assert stats.average_score == stats.total_score.divide(stats.success_count)

    def test_succeeded_keep_natural_order(self, five_trial_scenario):
        """The succeeded list follows the trial list order."""
        stats = accumulate_trials(five_trial_scenario.trials)
        assert [t.index for t in stats.succeeded] == [0, 1, 3, 4]

    def test_all_failed(self):
        """All failures leave averages undefined without raising."""
        stats = accumulate_trials([make_trial(i) for i in range(3)])
        assert stats.failure_count == 3
        assert stats.success_count == 0
        assert stats.total_score is None
        assert stats.average_score is None
        assert stats.average_uninitialized_variable_count is None
        assert stats.uninitialized_solution_count == 0
        assert stats.infeasible_score_count == 0
        assert stats.succeeded == []

    def test_empty_list_raises(self):
        """An empty trial list is a caller error."""
        with pytest.raises(ValueError):
            accumulate_trials([])

    def test_uninitialized_and_infeasible_counts(self):
        """Uninitialized trials are not also counted as infeasible."""
        trials = [
            make_trial(0, HardSoftScore(-1, 0), uninitialized_variable_count=2),
            make_trial(1, HardSoftScore(-1, 0)),
            make_trial(2, HardSoftScore(0, -5), uninitialized_variable_count=3),
            make_trial(3, HardSoftScore(0, -5)),
        ]
        stats = accumulate_trials(trials)
        assert stats.uninitialized_solution_count == 2
        assert stats.total_uninitialized_variable_count == 5
        assert stats.infeasible_score_count == 1
        # ceil(5 / 4)
        assert stats.average_uninitialized_variable_count == 2

    def test_fully_initialized_average_is_zero(self, five_trial_scenario):
        """No uninitialized variables gives an average of 0."""
        stats = accumulate_trials(five_trial_scenario.trials)
        assert stats.average_uninitialized_variable_count == 0

    def test_does_not_rank(self, five_trial_scenario):
        """Accumulation alone leaves ranks untouched."""
        accumulate_trials(five_trial_scenario.trials)
        assert all(t.rank is None for t in five_trial_scenario.trials)
