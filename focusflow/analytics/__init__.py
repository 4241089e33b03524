"""
Analytics module - pure functions over session history

- scoring: per-session productivity score
- streak: current and longest consecutive-day streaks
- progress: ProgressStats aggregation and daily statistics
"""

from .progress import aggregate, daily_stats, focus_time_series
from .scoring import (
    average_productivity,
    get_productivity_level,
    score_breakdown,
    score_session,
)
from .streak import calculate_longest_streak, calculate_streak

__all__ = [
    "aggregate",
    "daily_stats",
    "focus_time_series",
    "average_productivity",
    "get_productivity_level",
    "score_breakdown",
    "score_session",
    "calculate_streak",
    "calculate_longest_streak",
]
