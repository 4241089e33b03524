"""
Progress aggregator
Folds a session history into summary statistics for reporting surfaces.

Everything is recomputed from the full history on every call; nothing is
patched incrementally.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from focusflow.models.analytics import DailyFocusStats, ProgressStats
from focusflow.models.entities import FocusSession, SessionOutcome

from .scoring import average_productivity
from .streak import calculate_longest_streak, calculate_streak

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30


def focus_time_series(
    sessions: Iterable[FocusSession], days: int, now: Optional[datetime] = None
) -> List[int]:
    """
    Bucket focus minutes by calendar day of each session's start time

    Args:
        sessions: Session history
        days: Window length in days
        now: Reference time; its day is the last bucket

    Returns:
        `days` buckets of minutes, oldest day first
    """
    today = (now or datetime.now()).date()
    first_day = today - timedelta(days=days - 1)
    buckets = [0] * days

    for session in sessions:
        day = session.start_time.date()
        if first_day <= day <= today:
            buckets[(day - first_day).days] += session.actual_duration_minutes or 0

    return buckets


def aggregate(
    sessions: Iterable[FocusSession],
    now: Optional[datetime] = None,
    weekly_days: int = WEEKLY_WINDOW_DAYS,
    monthly_days: int = MONTHLY_WINDOW_DAYS,
) -> ProgressStats:
    """
    Calculate progress statistics from a session history

    Args:
        sessions: Full session history snapshot
        now: Reference time for streaks and day series
        weekly_days: Length of the weekly series
        monthly_days: Length of the monthly series

    Returns:
        ProgressStats; all zeros for an empty history
    """
    sessions = list(sessions)
    if not sessions:
        return ProgressStats(
            weekly_focus_time=[0] * weekly_days,
            monthly_focus_time=[0] * monthly_days,
        )

    total_sessions = len(sessions)
    total_focus_time = sum(s.actual_duration_minutes or 0 for s in sessions)
    completed_sessions = sum(
        1 for s in sessions if s.outcome == SessionOutcome.COMPLETED
    )

    current_streak = calculate_streak(sessions, now)
    longest_streak = max(current_streak, calculate_longest_streak(sessions))

    return ProgressStats(
        total_sessions=total_sessions,
        completed_sessions=completed_sessions,
        total_focus_time=total_focus_time,
        average_session_length=total_focus_time / total_sessions,
        completion_rate=completed_sessions / total_sessions * 100,
        current_streak=current_streak,
        longest_streak=longest_streak,
        productivity_score=average_productivity(sessions),
        weekly_focus_time=focus_time_series(sessions, weekly_days, now),
        monthly_focus_time=focus_time_series(sessions, monthly_days, now),
    )


def daily_stats(
    sessions: Iterable[FocusSession], day: Union[date, str]
) -> DailyFocusStats:
    """
    Get focus statistics for a specific day

    Args:
        sessions: Session history
        day: Calendar day, as a date or a YYYY-MM-DD string

    Returns:
        Completed count, total and average focus minutes, and that day's
        sessions in start order

    Raises:
        ValueError: If `day` is a string that is not YYYY-MM-DD
    """
    if isinstance(day, str):
        day = date.fromisoformat(day)
    elif isinstance(day, datetime):
        day = day.date()

    day_sessions = sorted(
        (s for s in sessions if s.start_time.date() == day),
        key=lambda s: s.start_time,
    )
    total_minutes = sum(s.actual_duration_minutes or 0 for s in day_sessions)

    return DailyFocusStats(
        day=day,
        completed_count=sum(
            1 for s in day_sessions if s.outcome == SessionOutcome.COMPLETED
        ),
        total_focus_minutes=total_minutes,
        average_duration_minutes=(
            round(total_minutes / len(day_sessions), 1) if day_sessions else 0
        ),
        sessions=day_sessions,
    )
