"""Aggregation, ranking and merge modules."""

from .trial import TrialResult
from .accumulator import AggregateStats, accumulate_trials
from .ranking import RankingCriteria, rank_trials, rank_scenarios
from .representative import Representatives, select_representatives
from .scenario import ScenarioAggregate
from .groups import ProblemResult, SolverConfigResult
from .merge import create_merge

__all__ = [
    "TrialResult",
    "AggregateStats",
    "accumulate_trials",
    "RankingCriteria",
    "rank_trials",
    "rank_scenarios",
    "Representatives",
    "select_representatives",
    "ScenarioAggregate",
    "ProblemResult",
    "SolverConfigResult",
    "create_merge",
]
