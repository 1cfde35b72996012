"""
Outcome of a single trial run.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from trial_aggregator.scoring.difference import ScoreDifferencePercentage
from trial_aggregator.scoring.score import Score


@dataclass
class TrialResult:
    """One independent run of a scenario."""
    index: int
    failed: bool = False
    score: Optional[Score] = None

    # 0 means every planning variable was assigned
    uninitialized_variable_count: int = 0

    time_millis_spent: int = 0
    calculate_count: int = 0
    used_memory_after_input_solution: Optional[int] = None

    # Filled in relative to the other scenarios of the same problem
    winning_score_difference: Optional[Score] = None
    worst_score_difference_percentage: Optional[ScoreDifferencePercentage] = None

    # Ranking starts from 0, None for failed trials
    rank: Optional[int] = None

    def __post_init__(self):
        if self.failed and self.score is not None:
            raise ValueError(f"Trial {self.index} failed but has a score ({self.score})")
        if not self.failed and self.score is None:
            raise ValueError(f"Trial {self.index} succeeded but has no score")
        if self.uninitialized_variable_count < 0:
            raise ValueError(
                f"Trial {self.index} has a negative uninitialized variable count "
                f"({self.uninitialized_variable_count})"
            )

    @property
    def is_initialized(self) -> bool:
        return self.uninitialized_variable_count == 0

    @property
    def is_score_feasible(self) -> bool:
        return self.score is not None and self.score.is_feasible()

    @property
    def average_calculate_count_per_second(self) -> int:
        return calculate_count_per_second(self.calculate_count, self.time_millis_spent)

    @classmethod
    def create_merge(cls, old_trial: "TrialResult", index: int) -> "TrialResult":
        """Recreate a trial under a new stable index, keeping its outcome."""
        return cls(
            index=index,
            failed=old_trial.failed,
            score=old_trial.score,
            uninitialized_variable_count=old_trial.uninitialized_variable_count,
            time_millis_spent=old_trial.time_millis_spent,
            calculate_count=old_trial.calculate_count,
            used_memory_after_input_solution=old_trial.used_memory_after_input_solution,
            winning_score_difference=old_trial.winning_score_difference,
            worst_score_difference_percentage=old_trial.worst_score_difference_percentage,
            rank=old_trial.rank,
        )

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "failed": self.failed,
            "score": str(self.score) if self.score is not None else None,
            "uninitialized_variable_count": self.uninitialized_variable_count,
            "time_millis_spent": self.time_millis_spent,
            "calculate_count": self.calculate_count,
            "used_memory_after_input_solution": self.used_memory_after_input_solution,
            "winning_score_difference": (
                str(self.winning_score_difference)
                if self.winning_score_difference is not None else None
            ),
            "worst_score_difference_percentage": (
                self.worst_score_difference_percentage.to_list()
                if self.worst_score_difference_percentage is not None else None
            ),
            "rank": self.rank,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        index: int,
        parse_score: Callable[[str], Score],
    ) -> "TrialResult":
        """
        Create a trial from an executor's raw output.

        Args:
            data: Trial dictionary ("failed", "score", counts and timings)
            index: Position of the trial within its scenario
            parse_score: Parser for the configured score type

        Returns:
            TrialResult
        """
        if not isinstance(data, dict):
            raise ValueError(f"Trial {index} must be an object, got {type(data).__name__}")
        failed = bool(data.get("failed", False))
        raw_score = data.get("score")
        score = parse_score(str(raw_score)) if raw_score is not None and not failed else None
        memory = data.get("used_memory_after_input_solution")
        try:
            uninitialized_variable_count = int(data.get("uninitialized_variable_count", 0))
            time_millis_spent = int(data.get("time_millis_spent", 0))
            calculate_count = int(data.get("calculate_count", 0))
            used_memory = int(memory) if memory is not None else None
        except (TypeError, ValueError) as e:
            raise ValueError(f"Trial {index} has an invalid count or timing: {e}") from e
        return cls(
            index=data.get("index", index),
            failed=failed,
            score=score,
            uninitialized_variable_count=uninitialized_variable_count,
            time_millis_spent=time_millis_spent,
            calculate_count=calculate_count,
            used_memory_after_input_solution=used_memory,
        )


def calculate_count_per_second(calculate_count: int, time_millis_spent: int) -> int:
    """Score calculations per second; a zero elapsed time counts as 1 millisecond."""
    if time_millis_spent == 0:
        # Avoid dividing by zero on a fast machine
        time_millis_spent = 1
    return calculate_count * 1000 // time_millis_spent
