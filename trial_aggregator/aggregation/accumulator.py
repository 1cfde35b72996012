"""
Totals, averages and failure accounting over the trials of one scenario.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from trial_aggregator.aggregation.trial import TrialResult
from trial_aggregator.scoring.score import Score
from trial_aggregator.scoring.statistics import ceil_divide

logger = logging.getLogger(__name__)


@dataclass
class AggregateStats:
    """Scenario-level statistics derived from its trials."""
    trial_count: int
    failure_count: int = 0
    total_score: Optional[Score] = None
    average_score: Optional[Score] = None
    total_uninitialized_variable_count: int = 0
    average_uninitialized_variable_count: Optional[int] = None
    uninitialized_solution_count: int = 0
    infeasible_score_count: int = 0

    # Succeeded trials in their natural order
    succeeded: List[TrialResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return self.trial_count - self.failure_count


def accumulate_trials(trials: Sequence[TrialResult]) -> AggregateStats:
    """
    Compute totals and averages for a scenario.

    Failed trials are counted and excluded from every score statistic. When
    no trial succeeded, the score totals and averages stay None.

    Args:
        trials: All trials of the scenario, in their natural order

    Returns:
        AggregateStats
    """
    if not trials:
        raise ValueError("Cannot accumulate results from an empty trial list")

    stats = AggregateStats(trial_count=len(trials))

    for trial in trials:
        if trial.failed:
            stats.failure_count += 1
            continue

        stats.succeeded.append(trial)
        if not trial.is_initialized:
            stats.uninitialized_solution_count += 1
            stats.total_uninitialized_variable_count += trial.uninitialized_variable_count
        elif not trial.is_score_feasible:
            stats.infeasible_score_count += 1

        # Natural order keeps float rounding deterministic
        if stats.total_score is None:
            stats.total_score = trial.score
        else:
            stats.total_score = stats.total_score.add(trial.score)

    if stats.succeeded:
        stats.average_score = stats.total_score.divide(stats.success_count)
        stats.average_uninitialized_variable_count = ceil_divide(
            stats.total_uninitialized_variable_count, stats.success_count
        )
    else:
        logger.warning(f"All {stats.trial_count} trials failed, averages are undefined")

    logger.debug(
        f"Accumulated {stats.trial_count} trials: {stats.failure_count} failed, "
        f"average score {stats.average_score}"
    )
    return stats
