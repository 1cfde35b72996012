"""
Unit tests for representative trial selection.

Run with: pytest tests/test_representative.py -v
"""

import pytest

from trial_aggregator.aggregation.ranking import rank_trials
from trial_aggregator.aggregation.representative import (
    order_by_representative_rank,
    select_representatives,
)
from trial_aggregator.scoring.score import SimpleScore

from .conftest import make_trial


def _ranked(values):
    trials = [make_trial(i, SimpleScore(v) if v is not None else None) for i, v in enumerate(values)]
    rank_trials([t for t in trials if not t.failed])
    return trials


class TestSelectRepresentatives:
    """Tests for select_representatives."""

    def test_odd_length_takes_middle(self):
        """n=5 takes index 2 of the ordered list."""
        trials = _ranked([50, 40, 30, 20, 10])
        reps = select_representatives(trials)
        assert reps.best_index == 0
        assert reps.median_index == 2
        assert reps.worst_index == 4

    def test_even_length_takes_upper_median(self):
        """n=4 takes index 2 of the ordered list (0-indexed third)."""
        trials = _ranked([10, 40, 30, 20])
        reps = select_representatives(trials)
        # Ordered: 40 (1), 30 (2), 20 (3), 10 (0)
        assert reps.best_index == 1
        assert reps.median_index == 3
        assert reps.worst_index == 0

    def test_failed_trial_is_worst(self):
        """A failed trial sorts after every succeeded trial."""
        trials = _ranked([None, 10, 20])
        reps = select_representatives(trials)
        assert reps.best_index == 2
        assert reps.worst_index == 0

    def test_ties_keep_natural_order(self):
        """Tied trials are ordered by their position in the list."""
        trials = _ranked([10, 20, None, 20, 30])
        ordered = order_by_representative_rank(trials)
        assert [t.index for t in ordered] == [4, 1, 3, 0, 2]
        assert select_representatives(trials).median_index == 3

    def test_all_failed(self):
        """All failures still yield representatives, in natural order."""
        trials = _ranked([None, None, None])
        reps = select_representatives(trials)
        assert (reps.best_index, reps.median_index, reps.worst_index) == (0, 1, 2)
        assert all(t.rank is None for t in trials)

    def test_single_trial(self):
        """One trial is best, median and worst."""
        reps = select_representatives(_ranked([5]))
        assert (reps.best_index, reps.median_index, reps.worst_index) == (0, 0, 0)

    def test_empty_raises(self):
        """Selecting from nothing is a caller error."""
        with pytest.raises(ValueError):
            select_representatives([])
