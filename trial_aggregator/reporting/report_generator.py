"""
Report generation utilities.
"""

import json
import numpy as np
from pathlib import Path
from typing import List, Dict, Any, Optional
from datetime import datetime

from trial_aggregator.aggregation.representative import order_by_representative_rank
from trial_aggregator.aggregation.scenario import ScenarioAggregate
from trial_aggregator.loader import BenchmarkResults


class ReportGenerator:
    """
    Generate reports from accumulated benchmark results.

    Only reads the scenario aggregates; absent values are rendered as N/A.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.reports_dir = self.output_dir / "reports"
        self.reports_dir.mkdir(parents=True, exist_ok=True)

    def generate_summary_report(
        self,
        results: BenchmarkResults,
        aggregator_config: Dict[str, Any],
        top_n: int = 10,
    ) -> Path:
        """
        Generate a summary report in JSON format.

        Args:
            results: Accumulated benchmark results
            aggregator_config: Configuration used for the aggregation
            top_n: Number of best scenarios listed per problem

        Returns:
            Path to generated report
        """
        report = {
            "generated_at": datetime.now().isoformat(),
            "total_scenarios": len(results.scenarios),
            "total_trials": sum(s.total_trial_count for s in results.scenarios),
            "scenarios_with_failures": sum(1 for s in results.scenarios if s.has_any_failure),
            "aggregator_config": aggregator_config,
            "summary_statistics": self._compute_summary_stats(results.scenarios),
            "problems": {
                name: [s.to_dict() for s in ranked_scenarios(problem.scenarios)[:top_n]]
                for name, problem in results.problem_results.items()
            },
            "solvers": {
                name: {
                    "scenario_count": len(solver.scenarios),
                    "failure_count": solver.failure_count,
                    "winning_count": solver.winning_count,
                }
                for name, solver in results.solver_results.items()
            },
        }

        report_path = self.reports_dir / "summary.json"
        with open(report_path, "w") as f:
            json.dump(report, f, indent=2)

        return report_path

    def generate_text_summary(self, results: BenchmarkResults, top_n: int = 10) -> str:
        """
        Generate a human-readable text summary.

        Args:
            results: Accumulated benchmark results
            top_n: Number of best scenarios listed per problem

        Returns:
            Text summary string
        """
        lines = [
            "=" * 60,
            "TRIAL AGGREGATION SUMMARY",
            "=" * 60,
            "",
            f"Scenarios: {len(results.scenarios)}",
            f"Scenarios with failed trials: {sum(1 for s in results.scenarios if s.has_any_failure)}",
        ]

        for problem_name, problem in results.problem_results.items():
            lines.extend(["", f"PROBLEM {problem_name}", "-" * 40])
            for scenario in ranked_scenarios(problem.scenarios)[:top_n]:
                lines.extend(self._scenario_lines(scenario))

        lines.extend([
            "",
            "=" * 60,
            "END OF SUMMARY",
            "=" * 60,
        ])

        return "\n".join(lines)

    def _scenario_lines(self, scenario: ScenarioAggregate) -> List[str]:
        ranking = _na(scenario.ranking)
        lines = [
            f"\nRank {ranking}: {scenario.solver_name}",
            f"  Average Score: {_na(scenario.average_score_with_uninitialized_prefix)}",
            f"  Standard Deviation: {_na(scenario.standard_deviation_string)}",
            f"  Successes: {scenario.success_count}/{scenario.total_trial_count}",
            f"  Infeasible: {_na(scenario.infeasible_score_count)}",
            f"  Uninitialized Solutions: {_na(scenario.uninitialized_solution_count)}",
            f"  Median Time (ms): {_na(scenario.time_millis_spent)}",
            f"  Calculations/s: {_na(scenario.average_calculate_count_per_second)}",
        ]
        if scenario.worst_score_difference_percentage is not None:
            lines.append(
                f"  Difference To Worst: {scenario.worst_score_difference_percentage.to_string()}"
            )

        trial_ranks = ", ".join(
            f"#{t.index}={'failed' if t.failed else t.rank}"
            for t in order_by_representative_rank(scenario.trials)
        )
        lines.append(f"  Trials: {trial_ranks}")
        return lines

    def _compute_summary_stats(
        self,
        scenarios: List[ScenarioAggregate],
    ) -> Dict[str, Any]:
        """Compute summary statistics across all scenarios."""
        if not scenarios:
            return {}

        success_rates = [s.success_count / s.total_trial_count for s in scenarios]
        speeds = [
            s.average_calculate_count_per_second for s in scenarios
            if s.average_calculate_count_per_second is not None
        ]

        stats = {
            "success_rate_distribution": {
                "mean": float(np.mean(success_rates)),
                "std": float(np.std(success_rates)),
                "min": float(np.min(success_rates)),
                "max": float(np.max(success_rates)),
            },
        }
        if speeds:
            stats["calculate_count_per_second_distribution"] = {
                "mean": float(np.mean(speeds)),
                "std": float(np.std(speeds)),
                "min": float(np.min(speeds)),
                "max": float(np.max(speeds)),
                "median": float(np.median(speeds)),
            }
        return stats

    def save_text_report(self, content: str, filename: str = "summary.txt") -> Path:
        """Save text content to a report file."""
        report_path = self.reports_dir / filename
        with open(report_path, "w") as f:
            f.write(content)
        return report_path


def ranked_scenarios(scenarios: List[ScenarioAggregate]) -> List[ScenarioAggregate]:
    """Scenarios by ranking, unranked (all trials failed) last."""
    return sorted(scenarios, key=lambda s: (s.ranking is None, s.ranking or 0))


def _na(value: Optional[Any]) -> str:
    return "N/A" if value is None else str(value)
