"""
Reattach a finished scenario aggregate under rebuilt groupings.
"""

import copy
import logging

from trial_aggregator.aggregation.groups import ProblemResult, SolverConfigResult
from trial_aggregator.aggregation.scenario import ScenarioAggregate
from trial_aggregator.aggregation.trial import TrialResult

logger = logging.getLogger(__name__)

_COPIED_FIELDS = (
    "failure_count",
    "total_score",
    "average_score",
    "total_uninitialized_variable_count",
    "average_uninitialized_variable_count",
    "uninitialized_solution_count",
    "infeasible_score_count",
    "standard_deviation",
    "used_memory_after_input_solution",
    "time_millis_spent",
    "calculate_count",
    "winning_score_difference",
    "worst_score_difference_percentage",
    "ranking",
)


def create_merge(
    solver_result: SolverConfigResult,
    problem_result: ProblemResult,
    old_scenario: ScenarioAggregate,
) -> ScenarioAggregate:
    """
    Recreate a scenario under new groupings without recomputing it.

    Trials are recreated in order with fresh indices, so the copied
    best/median/worst positions point at the new trial objects. The new
    scenario is registered into both groupings.

    Args:
        solver_result: New solver configuration grouping
        problem_result: New problem instance grouping
        old_scenario: Accumulated scenario to carry over

    Returns:
        The new ScenarioAggregate
    """
    if not old_scenario.trials:
        raise ValueError(f"Cannot merge scenario {old_scenario.name} without trials")

    new_scenario = ScenarioAggregate(solver_result.name, problem_result.name)
    for index, old_trial in enumerate(old_scenario.trials):
        new_scenario.trials.append(TrialResult.create_merge(old_trial, index))

    for attribute in _COPIED_FIELDS:
        value = getattr(old_scenario, attribute)
        setattr(new_scenario, attribute, copy.copy(value))
    new_scenario.representatives = copy.copy(old_scenario.representatives)

    solver_result.register(new_scenario)
    problem_result.register(new_scenario)

    logger.debug(f"Merged scenario {old_scenario.name} into {new_scenario.name}")
    return new_scenario
