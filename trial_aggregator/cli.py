#!/usr/bin/env python3
"""
Trial Aggregator CLI - entry point for ranking repeated benchmark trials.

Usage:
    trial-aggregator results/benchmark.json
    trial-aggregator results/benchmark.json --config aggregator.json
    trial-aggregator results/benchmark.json --score-type hard_soft --secondary-key time_millis_spent
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from trial_aggregator.config import (
    AggregatorConfig,
    get_default_config,
    merge_configs,
)
from trial_aggregator.loader import load_benchmark
from trial_aggregator.reporting.report_generator import ReportGenerator


def setup_logging(level: str = "info") -> None:
    """Configure logging for the trial aggregator."""
    log_levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(
        level=log_levels.get(level.lower(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Trial Aggregator: statistics and rankings over repeated benchmark trials",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s results/benchmark.json
  %(prog)s results/benchmark.json --config aggregator.json
  %(prog)s results/benchmark.json --score-type hard_soft --top-n 3
        """,
    )

    parser.add_argument(
        "benchmark_file",
        help="Path to the JSON file with completed trial outcomes",
    )

    parser.add_argument(
        "--config", "-c",
        help="Path to aggregator configuration file",
    )

    parser.add_argument(
        "--score-type",
        choices=["simple", "hard_soft", "bendable"],
        help="Score type of the trials",
    )

    parser.add_argument(
        "--secondary-key",
        action="append",
        help="Tie-break key for ranking trials (repeatable)",
    )

    parser.add_argument(
        "--output-dir", "-o",
        help="Output directory for reports",
    )

    parser.add_argument(
        "--top-n",
        type=int,
        help="Number of scenarios listed per problem",
    )

    parser.add_argument(
        "--no-json",
        action="store_true",
        help="Do not write the JSON summary report",
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show configuration and exit without aggregating",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AggregatorConfig:
    """Build aggregator configuration from arguments."""
    config = get_default_config()

    # Load and merge config file if provided
    if args.config:
        config_path = Path(args.config)
        if config_path.exists():
            with open(config_path) as f:
                override_data = json.load(f)
            config = merge_configs(config, override_data.get("trial_aggregation", override_data))
        else:
            raise FileNotFoundError(f"Config file not found: {args.config}")

    # Apply command-line overrides
    overrides = {}
    if args.score_type:
        overrides["score"] = {"score_type": args.score_type}

    if args.secondary_key:
        overrides["ranking"] = {"secondary_keys": args.secondary_key}

    output_overrides = {}
    if args.output_dir:
        output_overrides["output_dir"] = args.output_dir
    if args.top_n is not None:
        output_overrides["top_n_scenarios"] = args.top_n
    if args.no_json:
        output_overrides["write_json_summary"] = False
    if output_overrides:
        overrides["output_settings"] = output_overrides

    overrides["execution_settings"] = {"log_level": args.log_level}

    return merge_configs(config, overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Build configuration
    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError, TypeError) as e:
        print(f"Error: {e}")
        return 1

    setup_logging(config.execution_settings.log_level)
    logger = logging.getLogger("trial_aggregator")

    # Show configuration in dry-run mode
    if args.dry_run:
        print("Trial Aggregator Configuration:")
        print("=" * 50)
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    logger.info(f"Benchmark file: {args.benchmark_file}")
    logger.info(f"Score type: {config.score.score_type}")
    logger.info(f"Ranking: {config.ranking.primary_key} then {config.ranking.secondary_keys}")

    try:
        results = load_benchmark(args.benchmark_file, config)
        results.accumulate(config)
    except (FileNotFoundError, ValueError, TypeError) as e:
        print(f"Error: {e}")
        return 1

    top_n = config.output_settings.top_n_scenarios
    generator = ReportGenerator(Path(config.output_settings.output_dir))
    summary = generator.generate_text_summary(results, top_n=top_n)
    print(summary)
    generator.save_text_report(summary)

    if config.output_settings.write_json_summary:
        report_path = generator.generate_summary_report(results, config.to_dict(), top_n=top_n)
        logger.info(f"Summary written to {report_path}")

    return 0


def run():
    """Console script wrapper."""
    return main()


if __name__ == "__main__":
    sys.exit(run())
