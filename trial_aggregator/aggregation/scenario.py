"""
Aggregate of all trials of one scenario (solver configuration x problem instance).
"""

import logging
from typing import List, Optional

from trial_aggregator.aggregation.accumulator import accumulate_trials
from trial_aggregator.aggregation.ranking import DominanceComparator, rank_trials
from trial_aggregator.aggregation.representative import Representatives, select_representatives
from trial_aggregator.aggregation.trial import TrialResult, calculate_count_per_second
from trial_aggregator.scoring.difference import ScoreDifferencePercentage
from trial_aggregator.scoring.score import Score, score_with_uninitialized_prefix
from trial_aggregator.scoring.statistics import (
    determine_standard_deviation,
    standard_deviation_string,
)

logger = logging.getLogger(__name__)


class ScenarioAggregate:
    """
    Statistics over the repeated trials of one scenario.

    Lifecycle:
    1. Created empty for a (solver, problem) pair
    2. Trials are appended as the executor completes them
    3. accumulate() is called once, filling every derived field
    4. Read-only afterwards, unless superseded by a merge
    """

    def __init__(self, solver_name: str, problem_name: str):
        self.solver_name = solver_name
        self.problem_name = problem_name
        self.trials: List[TrialResult] = []

        self.failure_count: Optional[int] = None
        self.total_score: Optional[Score] = None
        self.average_score: Optional[Score] = None
        self.total_uninitialized_variable_count: Optional[int] = None
        self.average_uninitialized_variable_count: Optional[int] = None
        self.uninitialized_solution_count: Optional[int] = None
        self.infeasible_score_count: Optional[int] = None
        self.standard_deviation: Optional[List[float]] = None
        self.representatives: Optional[Representatives] = None

        # Copied from the median trial
        self.used_memory_after_input_solution: Optional[int] = None
        self.time_millis_spent: Optional[int] = None
        self.calculate_count: Optional[int] = None
        self.winning_score_difference: Optional[Score] = None
        self.worst_score_difference_percentage: Optional[ScoreDifferencePercentage] = None

        # Ranking among the scenarios of the same problem, starts from 0
        self.ranking: Optional[int] = None

    @property
    def name(self) -> str:
        return f"{self.problem_name}_{self.solver_name}"

    def add_trial(self, trial: TrialResult) -> None:
        if self.is_accumulated:
            raise ValueError(f"Cannot add a trial to already accumulated scenario {self.name}")
        self.trials.append(trial)

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    @property
    def is_accumulated(self) -> bool:
        return self.failure_count is not None

    def accumulate(self, comparator: Optional[DominanceComparator] = None) -> None:
        """
        Compute every derived field, once all trials are known.

        Runs the aggregation, ranking, representative selection and standard
        deviation steps in that order.

        Args:
            comparator: Dominance comparator for ranking trials
        """
        if self.is_accumulated:
            raise ValueError(f"Scenario {self.name} is already accumulated")

        stats = accumulate_trials(self.trials)
        self.failure_count = stats.failure_count
        self.total_score = stats.total_score
        self.average_score = stats.average_score
        self.total_uninitialized_variable_count = stats.total_uninitialized_variable_count
        self.average_uninitialized_variable_count = stats.average_uninitialized_variable_count
        self.uninitialized_solution_count = stats.uninitialized_solution_count
        self.infeasible_score_count = stats.infeasible_score_count

        rank_trials(stats.succeeded, comparator)
        self.determine_representatives()
        self.standard_deviation = determine_standard_deviation(
            stats.succeeded, self.average_score, self.success_count
        )

        logger.debug(
            f"Scenario {self.name}: {self.success_count}/{self.total_trial_count} succeeded, "
            f"average {self.average_score}, std {self.standard_deviation_string}"
        )

    def determine_representatives(self) -> None:
        """Select best/median/worst and copy the median's resource figures."""
        self.representatives = select_representatives(self.trials)
        median = self.median
        if self.success_count == 0:
            logger.debug(f"Every trial of scenario {self.name} failed, no median figures")
            self.used_memory_after_input_solution = None
            self.time_millis_spent = None
            self.calculate_count = None
            self.winning_score_difference = None
            self.worst_score_difference_percentage = None
            return
        self.used_memory_after_input_solution = median.used_memory_after_input_solution
        self.time_millis_spent = median.time_millis_spent
        self.calculate_count = median.calculate_count
        self.winning_score_difference = median.winning_score_difference
        self.worst_score_difference_percentage = median.worst_score_difference_percentage

    # ------------------------------------------------------------------
    # Representatives
    # ------------------------------------------------------------------

    @property
    def best(self) -> Optional[TrialResult]:
        return self._trial_at("best_index")

    @property
    def median(self) -> Optional[TrialResult]:
        return self._trial_at("median_index")

    @property
    def worst(self) -> Optional[TrialResult]:
        return self._trial_at("worst_index")

    def _trial_at(self, attribute: str) -> Optional[TrialResult]:
        if self.representatives is None:
            return None
        return self.trials[getattr(self.representatives, attribute)]

    # ------------------------------------------------------------------
    # Derived getters
    # ------------------------------------------------------------------

    @property
    def total_trial_count(self) -> int:
        return len(self.trials)

    @property
    def success_count(self) -> int:
        return len(self.trials) - (self.failure_count or 0)

    @property
    def has_all_success(self) -> bool:
        return self.failure_count is not None and self.failure_count == 0

    @property
    def has_any_failure(self) -> bool:
        return self.failure_count is not None and self.failure_count != 0

    @property
    def is_initialized(self) -> bool:
        return (
            self.average_uninitialized_variable_count is not None
            and self.average_uninitialized_variable_count == 0
        )

    @property
    def is_score_feasible(self) -> bool:
        if self.average_score is None:
            return True
        return self.average_score.is_feasible()

    @property
    def is_winner(self) -> bool:
        return self.ranking is not None and self.ranking == 0

    @property
    def average_calculate_count_per_second(self) -> Optional[int]:
        if self.calculate_count is None or self.time_millis_spent is None:
            return None
        return calculate_count_per_second(self.calculate_count, self.time_millis_spent)

    @property
    def average_score_with_uninitialized_prefix(self) -> Optional[str]:
        return score_with_uninitialized_prefix(
            self.average_uninitialized_variable_count, self.average_score
        )

    @property
    def standard_deviation_string(self) -> Optional[str]:
        return standard_deviation_string(self.standard_deviation)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "solver": self.solver_name,
            "problem": self.problem_name,
            "ranking": self.ranking,
            "trial_count": self.total_trial_count,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "total_score": str(self.total_score) if self.total_score is not None else None,
            "average_score": self.average_score_with_uninitialized_prefix,
            "total_uninitialized_variable_count": self.total_uninitialized_variable_count,
            "average_uninitialized_variable_count": self.average_uninitialized_variable_count,
            "uninitialized_solution_count": self.uninitialized_solution_count,
            "infeasible_score_count": self.infeasible_score_count,
            "standard_deviation": self.standard_deviation,
            "best_index": self.best.index if self.best is not None else None,
            "median_index": self.median.index if self.median is not None else None,
            "worst_index": self.worst.index if self.worst is not None else None,
            "used_memory_after_input_solution": self.used_memory_after_input_solution,
            "time_millis_spent": self.time_millis_spent,
            "calculate_count": self.calculate_count,
            "average_calculate_count_per_second": self.average_calculate_count_per_second,
            "winning_score_difference": (
                str(self.winning_score_difference)
                if self.winning_score_difference is not None else None
            ),
            "worst_score_difference_percentage": (
                self.worst_score_difference_percentage.to_list()
                if self.worst_score_difference_percentage is not None else None
            ),
            "trials": [trial.to_dict() for trial in self.trials],
        }

    def __repr__(self) -> str:
        return f"ScenarioAggregate({self.name})"
