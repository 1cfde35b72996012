"""
Configuration schema and utilities for trial aggregation.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any

from trial_aggregator.aggregation.ranking import RankingCriteria
from trial_aggregator.scoring.score import SCORE_TYPES


@dataclass
class RankingSettings:
    """How trials of a scenario are compared."""
    primary_key: str = "score"
    secondary_keys: List[str] = field(default_factory=list)
    higher_is_better: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        # Fail on unknown keys when loading, not when ranking
        self.to_criteria()

    def to_criteria(self) -> RankingCriteria:
        criteria = RankingCriteria(
            primary_key=self.primary_key,
            secondary_keys=list(self.secondary_keys),
        )
        # Only override the directions that were configured
        criteria.higher_is_better.update(self.higher_is_better)
        return criteria


@dataclass
class ScoreSettings:
    """Which score type the trial files contain."""
    score_type: str = "simple"  # "simple", "hard_soft" or "bendable"

    def __post_init__(self):
        if self.score_type not in SCORE_TYPES:
            raise ValueError(
                f"score_type must be one of {sorted(SCORE_TYPES)}, got '{self.score_type}'"
            )


@dataclass
class OutputSettings:
    """Settings for output generation."""
    output_dir: str = "aggregation_results"
    write_json_summary: bool = True
    top_n_scenarios: int = 10

    def __post_init__(self):
        if self.top_n_scenarios < 1:
            raise ValueError(f"top_n_scenarios must be at least 1, got {self.top_n_scenarios}")


@dataclass
class ExecutionSettings:
    """Settings for execution control."""
    log_level: str = "info"  # "debug", "info", "warning", "error"


@dataclass
class AggregatorConfig:
    """Complete trial aggregation configuration."""
    ranking: RankingSettings = field(default_factory=RankingSettings)
    score: ScoreSettings = field(default_factory=ScoreSettings)
    output_settings: OutputSettings = field(default_factory=OutputSettings)
    execution_settings: ExecutionSettings = field(default_factory=ExecutionSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregatorConfig":
        """Create from dictionary."""
        data = dict(data)

        if "ranking" in data and isinstance(data["ranking"], dict):
            data["ranking"] = RankingSettings(**data["ranking"])

        if "score" in data and isinstance(data["score"], dict):
            data["score"] = ScoreSettings(**data["score"])

        if "output_settings" in data and isinstance(data["output_settings"], dict):
            data["output_settings"] = OutputSettings(**data["output_settings"])

        if "execution_settings" in data and isinstance(data["execution_settings"], dict):
            data["execution_settings"] = ExecutionSettings(**data["execution_settings"])

        return cls(**data)

    @classmethod
    def load(cls, path: str) -> "AggregatorConfig":
        """Load configuration from JSON file."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data.get("trial_aggregation", data))


def get_default_config() -> AggregatorConfig:
    """Get default trial aggregation configuration."""
    return AggregatorConfig()


def merge_configs(base: AggregatorConfig, override: Dict[str, Any]) -> AggregatorConfig:
    """Merge override dictionary into base configuration."""
    base_dict = base.to_dict()
    _deep_merge(base_dict, override)
    return AggregatorConfig.from_dict(base_dict)


def _deep_merge(base: Dict, override: Dict) -> None:
    """Recursively merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
