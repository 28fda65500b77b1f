"""Aggregation module for game statistics.

- Folds GameSummary sequences into Stats snapshots
- Builds cumulative time series of snapshots
- Forbidden: database access, file IO
"""

from ns2stat.aggregation.continuous import build_continuous
from ns2stat.aggregation.filters import filter_bot_games, filter_by_length, filter_genuine
from ns2stat.aggregation.stats import StatsAccumulator, aggregate, merge_stats

__all__ = [
    "StatsAccumulator",
    "aggregate",
    "build_continuous",
    "filter_bot_games",
    "filter_by_length",
    "filter_genuine",
    "merge_stats",
]
