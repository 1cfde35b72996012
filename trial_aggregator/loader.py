"""
Load completed trial outcomes from a JSON benchmark file.

Expected layout:
    {
        "score_type": "hard_soft",          # optional, overrides the config
        "scenarios": [
            {
                "solver": "tabu_search",
                "problem": "nqueens_32",
                "trials": [
                    {"score": "0hard/-12soft", "time_millis_spent": 1200, ...},
                    {"failed": true, "time_millis_spent": 30},
                ]
            }
        ]
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

from trial_aggregator.aggregation.groups import ProblemResult, SolverConfigResult
from trial_aggregator.aggregation.scenario import ScenarioAggregate
from trial_aggregator.aggregation.trial import TrialResult
from trial_aggregator.config import AggregatorConfig
from trial_aggregator.scoring.score import get_score_parser

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResults:
    """Every scenario of a benchmark, grouped by solver and by problem."""
    solver_results: Dict[str, SolverConfigResult] = field(default_factory=dict)
    problem_results: Dict[str, ProblemResult] = field(default_factory=dict)

    @property
    def scenarios(self) -> List[ScenarioAggregate]:
        return [s for problem in self.problem_results.values() for s in problem.scenarios]

    def add_scenario(self, scenario: ScenarioAggregate) -> None:
        """Register a scenario into its solver and problem groupings, creating them as needed."""
        solver_result = self.solver_results.setdefault(
            scenario.solver_name, SolverConfigResult(scenario.solver_name)
        )
        problem_result = self.problem_results.setdefault(
            scenario.problem_name, ProblemResult(scenario.problem_name)
        )
        solver_result.register(scenario)
        problem_result.register(scenario)

    def accumulate(self, config: AggregatorConfig) -> None:
        """Accumulate every problem with the configured trial ranking."""
        comparator = config.ranking.to_criteria().comparator()
        for problem_result in self.problem_results.values():
            problem_result.accumulate_results(comparator)


def load_benchmark(path: Union[str, Path], config: AggregatorConfig) -> BenchmarkResults:
    """
    Load a benchmark file into scenario groupings.

    Args:
        path: JSON file written by the trial executor
        config: Aggregation configuration (score type)

    Returns:
        BenchmarkResults with every trial appended, not yet accumulated
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Benchmark file not found: {path}")

    with open(path) as f:
        data = json.load(f)

    return parse_benchmark(data, config)


def parse_benchmark(data: Dict, config: AggregatorConfig) -> BenchmarkResults:
    """Build scenario groupings from an already decoded benchmark dictionary."""
    parse_score = get_score_parser(data.get("score_type", config.score.score_type))

    results = BenchmarkResults()
    for scenario_data in data.get("scenarios", []):
        try:
            solver_name = scenario_data["solver"]
            problem_name = scenario_data["problem"]
        except KeyError as e:
            raise ValueError(f"Scenario entry is missing {e}: {scenario_data}") from e

        scenario = ScenarioAggregate(solver_name, problem_name)
        for index, trial_data in enumerate(scenario_data.get("trials", [])):
            scenario.add_trial(TrialResult.from_dict(trial_data, index, parse_score))

        if not scenario.trials:
            raise ValueError(f"Scenario {scenario.name} has no trials")

        results.add_scenario(scenario)
        logger.debug(f"Loaded scenario {scenario.name} with {len(scenario.trials)} trials")

    logger.info(
        f"Loaded {len(results.scenarios)} scenarios "
        f"({len(results.solver_results)} solvers x {len(results.problem_results)} problems)"
    )
    return results
