"""
Streak calculator
Consecutive-day streaks over completed focus sessions
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from focusflow.models.entities import FocusSession, SessionOutcome

ONE_DAY = timedelta(days=1)


def _completed(sessions: Iterable[FocusSession]) -> List[FocusSession]:
    return [s for s in sessions if s.outcome == SessionOutcome.COMPLETED]


def calculate_streak(
    sessions: Iterable[FocusSession], now: Optional[datetime] = None
) -> int:
    """
    Calculate the current streak

    Walks completed sessions newest first with a cursor starting at `now`;
    each session no more than one day (floored) before the cursor extends
    the streak and moves the cursor to it. The first larger gap ends the walk.

    Args:
        sessions: Session history in any order
        now: Reference time (defaults to the current time)

    Returns:
        Streak length, 0 for an empty or all-unfinished history
    """
    ordered = sorted(_completed(sessions), key=lambda s: s.start_time, reverse=True)

    if not ordered:
        return 0

    streak = 0
    current_date = now or datetime.now(ordered[0].start_time.tzinfo)

    for session in ordered:
        days_diff = (current_date - session.start_time) // ONE_DAY
        if days_diff <= 1:
            streak += 1
            current_date = session.start_time
        else:
            break

    return streak


def calculate_longest_streak(sessions: Iterable[FocusSession]) -> int:
    """
    Calculate the longest run of consecutive calendar days that each hold
    at least one completed session

    Returns:
        Longest run in days, 0 for no completed sessions
    """
    days = sorted({s.start_time.date() for s in _completed(sessions)})
    if not days:
        return 0

    longest = 1
    current = 1
    for previous, day in zip(days, days[1:]):
        if day - previous == ONE_DAY:
            current += 1
            longest = max(longest, current)
        else:
            current = 1

    return longest
