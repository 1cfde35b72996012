"""
Relative score differences, expressed per score level.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from trial_aggregator.scoring.score import Score


@dataclass(frozen=True)
class ScoreDifferencePercentage:
    """Per-level relative difference of a score compared to a base score."""
    percentage_levels: Tuple[float, ...]

    @classmethod
    def calculate(cls, base_score: Score, value_score: Score) -> "ScoreDifferencePercentage":
        """
        Compute (value - base) / |base| for every level.

        A zero base level yields 0.0 when the value level is also zero,
        otherwise +/- infinity depending on the direction of the change.
        """
        base_levels = base_score.to_level_numbers()
        value_levels = value_score.to_level_numbers()
        if len(base_levels) != len(value_levels):
            raise ValueError(
                f"Base score ({base_score}) and value score ({value_score}) "
                f"have a different number of levels"
            )
        percentage_levels = []
        for base, value in zip(base_levels, value_levels):
            if base != 0:
                percentage_levels.append((value - base) / abs(base))
            elif value == 0:
                percentage_levels.append(0.0)
            else:
                percentage_levels.append(math.copysign(math.inf, value))
        return cls(tuple(percentage_levels))

    def to_string(self) -> str:
        return "/".join(f"{level * 100:.2f}%" for level in self.percentage_levels)

    def to_list(self) -> list:
        return list(self.percentage_levels)

    def __str__(self) -> str:
        return self.to_string()
