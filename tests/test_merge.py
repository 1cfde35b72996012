"""
Unit tests for merging scenarios under rebuilt groupings.

Run with: pytest tests/test_merge.py -v
"""

import pytest

from trial_aggregator.aggregation.groups import ProblemResult, SolverConfigResult
from trial_aggregator.aggregation.merge import create_merge
from trial_aggregator.aggregation.scenario import ScenarioAggregate
from trial_aggregator.scoring.score import SimpleScore


@pytest.fixture
def groupings():
    return SolverConfigResult("solver_v2"), ProblemResult("problem_v2")


class TestCreateMerge:
    """Tests for create_merge."""

    def test_representatives_point_to_new_trials(self, five_trial_scenario, groupings):
        """best/median/worst follow the new trial objects at the same positions."""
        five_trial_scenario.accumulate()
        new = create_merge(*groupings, five_trial_scenario)

        assert new.best is new.trials[4]
        assert new.median is new.trials[3]
        assert new.worst is new.trials[2]
        assert new.best is not five_trial_scenario.best
        assert new.best.index == five_trial_scenario.best.index

    def test_statistics_are_copied(self, five_trial_scenario, groupings):
        """Nothing is recomputed, values carry over."""
        five_trial_scenario.accumulate()
        new = create_merge(*groupings, five_trial_scenario)

        assert new.is_accumulated
        assert new.failure_count == 1
        assert new.average_score == SimpleScore(20)
        assert new.standard_deviation == five_trial_scenario.standard_deviation
        assert new.time_millis_spent == five_trial_scenario.time_millis_spent
        assert [t.rank for t in new.trials] == [3, 1, None, 1, 0]

    def test_registered_in_both_groupings(self, five_trial_scenario, groupings):
        """The new scenario joins the solver and the problem grouping."""
        solver_result, problem_result = groupings
        five_trial_scenario.accumulate()
        new = create_merge(solver_result, problem_result, five_trial_scenario)

        assert solver_result.scenarios == [new]
        assert problem_result.scenarios == [new]
        assert new.name == "problem_v2_solver_v2"

    def test_old_scenario_untouched(self, five_trial_scenario, groupings):
        """The old scenario keeps its own trials."""
        five_trial_scenario.accumulate()
        old_trials = list(five_trial_scenario.trials)
        create_merge(*groupings, five_trial_scenario)
        assert five_trial_scenario.trials == old_trials
        assert five_trial_scenario.best is old_trials[4]

    def test_empty_raises(self, groupings):
        """Merging a scenario without trials is a caller error."""
        with pytest.raises(ValueError):
            create_merge(*groupings, ScenarioAggregate("solver", "problem"))
