"""
Selection of the best, median and worst trial of a scenario.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

from trial_aggregator.aggregation.trial import TrialResult
from trial_aggregator.scoring.statistics import ceil_divide

logger = logging.getLogger(__name__)


@dataclass
class Representatives:
    """Positions of the representative trials in the scenario's trial list."""
    best_index: int
    median_index: int
    worst_index: int


def select_representatives(trials: Sequence[TrialResult]) -> Representatives:
    """
    Pick the best, median and worst trial.

    A failed trial is worse than any succeeded one; succeeded trials are
    ordered by rank. The sort is stable, so ties keep their natural order.
    For an even number of trials the upper median is taken.

    Args:
        trials: All trials of the scenario (ranked already)

    Returns:
        Representatives, as positions in `trials`
    """
    if not trials:
        raise ValueError("Cannot get representative trials from an empty trial list")

    ordered = sorted(range(len(trials)), key=lambda i: _representative_key(trials[i]))
    representatives = Representatives(
        best_index=ordered[0],
        median_index=ordered[ceil_divide(len(ordered) - 1, 2)],
        worst_index=ordered[-1],
    )
    logger.debug(f"Representative trials: {representatives}")
    return representatives


def _representative_key(trial: TrialResult) -> tuple:
    return (trial.failed, trial.rank if trial.rank is not None else math.inf)


def order_by_representative_rank(trials: Sequence[TrialResult]) -> List[TrialResult]:
    """Trials ordered from best to worst, failed trials last."""
    return sorted(trials, key=_representative_key)
