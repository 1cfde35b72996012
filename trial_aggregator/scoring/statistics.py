"""
Spread statistics over the succeeded trials of a scenario.

Works on float64 level arrays rather than on Score arithmetic: squaring
integer levels overflows quickly and a standard deviation should not be
rounded to whole numbers.
"""

import numpy as np
from typing import List, Optional, Sequence, TYPE_CHECKING

from trial_aggregator.scoring.score import Score

if TYPE_CHECKING:
    from trial_aggregator.aggregation.trial import TrialResult


def ceil_divide(dividend: int, divisor: int) -> int:
    """
    Integer division rounding up.

    Args:
        dividend: Non-negative numerator
        divisor: Strictly positive denominator

    Returns:
        ceil(dividend / divisor)
    """
    if dividend < 0:
        raise ValueError(f"The dividend ({dividend}) must be non-negative")
    if divisor <= 0:
        raise ValueError(f"The divisor ({divisor}) must be strictly positive")
    return (dividend + divisor - 1) // divisor


def determine_standard_deviation(
    succeeded: Sequence["TrialResult"],
    average_score: Optional[Score],
    success_count: int,
) -> Optional[List[float]]:
    """
    Compute the population standard deviation of every score level.

    Args:
        succeeded: Trials that did not fail, all with the same score shape
        average_score: Average score of those trials
        success_count: Number of succeeded trials (the divisor)

    Returns:
        One standard deviation per score level, or None without successes
    """
    if success_count == 0:
        return None
    if average_score is None:
        raise ValueError(
            f"Average score cannot be None when there are {success_count} succeeded trials"
        )

    average_arr = np.array(average_score.to_level_numbers(), dtype=np.float64)
    level_arr = np.array(
        [trial.score.to_level_numbers() for trial in succeeded],
        dtype=np.float64,
    ).reshape(-1, len(average_arr))

    squared_total = np.sum((level_arr - average_arr) ** 2, axis=0)
    return [float(value) for value in np.sqrt(squared_total / success_count)]


def standard_deviation_string(standard_deviation: Optional[Sequence[float]]) -> Optional[str]:
    """Abbreviate each level to 2 decimals, switching to exponent notation for extremes."""
    if standard_deviation is None:
        return None
    parts = []
    for value in standard_deviation:
        if value == 0 or 0.001 <= abs(value) <= 10_000_000.0:
            parts.append(f"{value:.2f}")
        else:
            parts.append(f"{value:.2e}")
    return "/".join(parts)
