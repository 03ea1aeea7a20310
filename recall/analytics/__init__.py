"""
Analytics package exports.
"""

from recall.analytics.service import aggregate_stats, daily_stats, forecast_workload
from recall.analytics.types import AggregateStats, DailyStats

__all__ = [
    "aggregate_stats",
    "daily_stats",
    "forecast_workload",
    "AggregateStats",
    "DailyStats",
]
