"""
Shared builders for trial aggregation tests.
"""

from typing import List, Optional

import pytest

from trial_aggregator.aggregation.scenario import ScenarioAggregate
from trial_aggregator.aggregation.trial import TrialResult
from trial_aggregator.scoring.score import Score, SimpleScore


def make_trial(index: int, score: Optional[Score] = None, **kwargs) -> TrialResult:
    """Succeeded trial when a score is given, failed trial otherwise."""
    return TrialResult(index=index, failed=score is None, score=score, **kwargs)


def make_scenario(
    scores: List[Optional[int]],
    solver_name: str = "solver",
    problem_name: str = "problem",
) -> ScenarioAggregate:
    """Scenario with one SimpleScore trial per entry, None meaning a failed trial."""
    scenario = ScenarioAggregate(solver_name, problem_name)
    for index, value in enumerate(scores):
        score = SimpleScore(value) if value is not None else None
        scenario.add_trial(make_trial(
            index,
            score,
            time_millis_spent=1000 + index,
            calculate_count=10_000 * (index + 1),
            used_memory_after_input_solution=500 + index if score is not None else None,
        ))
    return scenario


@pytest.fixture
def five_trial_scenario() -> ScenarioAggregate:
    """5 trials, trial 2 failed, succeeded scores 10, 20, 20, 30."""
    return make_scenario([10, 20, None, 20, 30])
