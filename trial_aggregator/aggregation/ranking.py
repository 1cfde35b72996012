"""
Competition ranking of trials and scenarios.

Ranks start at 0 for the best entry. Entries the comparator reports as equal
share a rank, and the next distinct rank skips the size of the tie block
(scores 30, 20, 20, 10 rank as 0, 1, 1, 3).
"""

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, TYPE_CHECKING

from trial_aggregator.aggregation.trial import TrialResult
from trial_aggregator.scoring.score import Score

if TYPE_CHECKING:
    from trial_aggregator.aggregation.scenario import ScenarioAggregate

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Positive when the first trial dominates the second
DominanceComparator = Callable[[TrialResult, TrialResult], int]

RANKABLE_KEYS = (
    "score",
    "uninitialized_variable_count",
    "time_millis_spent",
    "calculate_count",
    "average_calculate_count_per_second",
    "used_memory_after_input_solution",
)


@dataclass
class RankingCriteria:
    """Criteria for ranking the trials of a scenario."""
    # Primary sort key
    primary_key: str = "score"

    # Secondary sort keys (for tie-breaking)
    secondary_keys: List[str] = None

    # Whether higher is better for each key
    higher_is_better: Dict[str, bool] = None

    def __post_init__(self):
        if self.secondary_keys is None:
            self.secondary_keys = []

        if self.higher_is_better is None:
            self.higher_is_better = {
                "score": True,
                "uninitialized_variable_count": False,
                "time_millis_spent": False,
                "calculate_count": True,
                "average_calculate_count_per_second": True,
                "used_memory_after_input_solution": False,
            }

        for key in [self.primary_key] + list(self.secondary_keys):
            if key not in RANKABLE_KEYS:
                raise ValueError(
                    f"Unknown ranking key '{key}', expected one of {list(RANKABLE_KEYS)}"
                )

    def comparator(self) -> DominanceComparator:
        """Build a dominance comparator comparing the keys in order."""
        keys = [self.primary_key] + list(self.secondary_keys)

        def compare(a: TrialResult, b: TrialResult) -> int:
            for key in keys:
                value_a = _get_trial_value(a, key)
                value_b = _get_trial_value(b, key)
                # None loses regardless of direction
                if value_a is None or value_b is None:
                    result = (value_a is not None) - (value_b is not None)
                    if result != 0:
                        return result
                    continue
                result = _compare_values(value_a, value_b)
                if result != 0:
                    return result if self.higher_is_better.get(key, True) else -result
            return 0

        return compare


def compare_trials_by_score(a: TrialResult, b: TrialResult) -> int:
    """Default dominance comparator: the higher score wins."""
    return a.score.compare_to(b.score)


def compare_scenarios_by_average_score(a: "ScenarioAggregate", b: "ScenarioAggregate") -> int:
    """Scenarios without any succeeded trial lose against every other scenario."""
    return _compare_values(a.average_score, b.average_score)


def rank_trials(
    succeeded: Sequence[TrialResult],
    comparator: Optional[DominanceComparator] = None,
) -> List[TrialResult]:
    """
    Assign a competition rank to every succeeded trial.

    Failed trials must not be passed in; their rank stays None.

    Args:
        succeeded: Trials that did not fail
        comparator: Dominance comparator (defaults to compare_trials_by_score)

    Returns:
        The trials sorted from best to worst
    """
    if comparator is None:
        comparator = compare_trials_by_score

    def set_rank(trial: TrialResult, rank: int) -> None:
        trial.rank = rank

    ranked = _assign_competition_ranks(succeeded, comparator, set_rank)
    logger.debug(f"Ranked trials: {[(t.index, t.rank) for t in ranked]}")
    return ranked


def rank_scenarios(
    scenarios: Sequence["ScenarioAggregate"],
    comparator: Optional[Callable[[Any, Any], int]] = None,
) -> List["ScenarioAggregate"]:
    """
    Assign a competition rank to scenarios of the same problem.

    Args:
        scenarios: Accumulated scenarios with at least one succeeded trial
        comparator: Dominance comparator (defaults to the average score)

    Returns:
        The scenarios sorted from best to worst
    """
    if comparator is None:
        comparator = compare_scenarios_by_average_score

    def set_ranking(scenario: "ScenarioAggregate", rank: int) -> None:
        scenario.ranking = rank

    return _assign_competition_ranks(scenarios, comparator, set_ranking)


def _assign_competition_ranks(
    items: Sequence[T],
    comparator: Callable[[T, T], int],
    set_rank: Callable[[T, int], None],
) -> List[T]:
    # Stable sort: equal items keep their natural order
    ordered = sorted(items, key=cmp_to_key(comparator), reverse=True)

    rank = 0
    previous = None
    same_rank_count = 0
    for item in ordered:
        if previous is not None and comparator(previous, item) != 0:
            rank += same_rank_count
            same_rank_count = 0
        set_rank(item, rank)
        previous = item
        same_rank_count += 1

    return ordered


def _get_trial_value(trial: TrialResult, key: str) -> Any:
    """Extract a rankable value from a trial by key name."""
    return getattr(trial, key)


def _compare_values(a: Any, b: Any) -> int:
    """Compare scores or numbers; None loses against any value."""
    if a is None or b is None:
        return (a is not None) - (b is not None)
    if isinstance(a, Score):
        return a.compare_to(b)
    return (a > b) - (a < b)
