"""
Unit tests for configuration loading and merging.

Run with: pytest tests/test_config.py -v
"""

import json

import pytest

from trial_aggregator.config import (
    AggregatorConfig,
    RankingSettings,
    ScoreSettings,
    get_default_config,
    merge_configs,
)


class TestAggregatorConfig:
    """Tests for AggregatorConfig."""

    def test_defaults(self):
        """Default config ranks by score on simple scores."""
        config = get_default_config()
        assert config.ranking.primary_key == "score"
        assert config.score.score_type == "simple"
        assert config.execution_settings.log_level == "info"

    def test_save_and_load(self, tmp_path):
        """Saved config loads back identically."""
        config = merge_configs(get_default_config(), {"score": {"score_type": "hard_soft"}})
        path = tmp_path / "config.json"
        config.save(str(path))
        assert AggregatorConfig.load(str(path)) == config

    def test_load_wrapped(self, tmp_path):
        """Config may be nested under a trial_aggregation key."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"trial_aggregation": {"score": {"score_type": "bendable"}}}))
        assert AggregatorConfig.load(str(path)).score.score_type == "bendable"

    def test_load_missing(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AggregatorConfig.load(str(tmp_path / "missing.json"))

    def test_merge_keeps_unrelated_values(self):
        """Deep merge only overrides the given keys."""
        config = merge_configs(
            get_default_config(),
            {"ranking": {"secondary_keys": ["time_millis_spent"]}},
        )
        assert config.ranking.primary_key == "score"
        assert config.ranking.secondary_keys == ["time_millis_spent"]

    def test_invalid_score_type(self):
        """Unknown score types are rejected."""
        with pytest.raises(ValueError):
            ScoreSettings(score_type="medium")

    def test_invalid_ranking_key(self):
        """Unknown ranking keys are rejected when loading."""
        with pytest.raises(ValueError):
            RankingSettings(secondary_keys=["unknown"])

    def test_ranking_direction_override(self):
        """Configured directions override only their own key."""
        criteria = RankingSettings(higher_is_better={"time_millis_spent": True}).to_criteria()
        assert criteria.higher_is_better["time_millis_spent"] is True
        assert criteria.higher_is_better["score"] is True
