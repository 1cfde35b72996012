"""Score types and score statistics."""

from .score import Score, SimpleScore, HardSoftScore, BendableScore, get_score_parser
from .difference import ScoreDifferencePercentage
from .statistics import ceil_divide, determine_standard_deviation, standard_deviation_string

__all__ = [
    "Score",
    "SimpleScore",
    "HardSoftScore",
    "BendableScore",
    "get_score_parser",
    "ScoreDifferencePercentage",
    "ceil_divide",
    "determine_standard_deviation",
    "standard_deviation_string",
]
