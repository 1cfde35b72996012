"""
Trial Aggregator: statistics and competitive ranking over repeated benchmark trials.

Aggregates the independent trial runs of each (solver configuration, problem
instance) scenario into totals, averages, spread and a tie-aware ranking, and
picks the median trial to report resource usage robust to outliers.
"""

__version__ = "0.1.0"
