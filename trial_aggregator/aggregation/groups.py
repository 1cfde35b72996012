"""
Groupings of scenarios by solver configuration and by problem instance.

Both groupings only hold references: a scenario is registered into its
solver grouping and its problem grouping after construction and keeps their
names, not the grouping objects themselves.
"""

import logging
from typing import List, Optional

from trial_aggregator.aggregation.ranking import DominanceComparator, rank_scenarios
from trial_aggregator.aggregation.scenario import ScenarioAggregate
from trial_aggregator.scoring.difference import ScoreDifferencePercentage

logger = logging.getLogger(__name__)


class SolverConfigResult:
    """All scenarios that ran one solver configuration."""

    def __init__(self, name: str):
        self.name = name
        self.scenarios: List[ScenarioAggregate] = []

    def register(self, scenario: ScenarioAggregate) -> None:
        if scenario.solver_name != self.name:
            raise ValueError(
                f"Scenario {scenario.name} belongs to solver '{scenario.solver_name}', "
                f"not '{self.name}'"
            )
        self.scenarios.append(scenario)

    @property
    def failure_count(self) -> int:
        return sum(s.failure_count or 0 for s in self.scenarios)

    @property
    def has_any_failure(self) -> bool:
        return any(s.has_any_failure for s in self.scenarios)

    @property
    def winning_count(self) -> int:
        """Number of problems on which this configuration ranked first."""
        return sum(1 for s in self.scenarios if s.is_winner)

    def __repr__(self) -> str:
        return f"SolverConfigResult({self.name}, {len(self.scenarios)} scenarios)"


class ProblemResult:
    """All scenarios that ran against one problem instance."""

    def __init__(self, name: str):
        self.name = name
        self.scenarios: List[ScenarioAggregate] = []

    def register(self, scenario: ScenarioAggregate) -> None:
        if scenario.problem_name != self.name:
            raise ValueError(
                f"Scenario {scenario.name} belongs to problem '{scenario.problem_name}', "
                f"not '{self.name}'"
            )
        self.scenarios.append(scenario)

    @property
    def winning_scenario(self) -> Optional[ScenarioAggregate]:
        for scenario in self.scenarios:
            if scenario.is_winner:
                return scenario
        return None

    def accumulate_results(self, comparator: Optional[DominanceComparator] = None) -> None:
        """
        Accumulate every scenario, then rank the scenarios against each other.

        Each succeeded trial is compared with the winning and the worst
        scenario's average score; representatives are then re-selected so
        that the median's differences reach the scenario.

        Args:
            comparator: Dominance comparator for ranking trials within a scenario
        """
        for scenario in self.scenarios:
            if not scenario.is_accumulated:
                scenario.accumulate(comparator)

        rankable = []
        for scenario in self.scenarios:
            if scenario.average_score is None:
                scenario.ranking = None
            else:
                rankable.append(scenario)

        if not rankable:
            logger.warning(f"Problem {self.name}: no scenario has a succeeded trial")
            return

        ranked = rank_scenarios(rankable)
        winner = ranked[0]
        worst = ranked[-1]
        logger.info(
            f"Problem {self.name}: winner {winner.solver_name} "
            f"({winner.average_score_with_uninitialized_prefix})"
        )

        for scenario in ranked:
            for trial in scenario.trials:
                if trial.failed:
                    continue
                trial.winning_score_difference = trial.score.subtract(winner.average_score)
                trial.worst_score_difference_percentage = ScoreDifferencePercentage.calculate(
                    worst.average_score, trial.score
                )
            scenario.determine_representatives()

    def __repr__(self) -> str:
        return f"ProblemResult({self.name}, {len(self.scenarios)} scenarios)"
