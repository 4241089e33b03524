"""Tests for analytics/progress.py: history aggregation."""

from datetime import date, datetime, timedelta

import pytest

from focusflow.analytics.progress import aggregate, daily_stats, focus_time_series
from focusflow.models import SessionOutcome


def test_empty_history_yields_zero_stats(now):
    stats = aggregate([], now=now)

    assert stats.total_sessions == 0
    assert stats.completion_rate == 0
    assert stats.average_session_length == 0
    assert stats.productivity_score == 0
    assert stats.current_streak == 0
    assert stats.weekly_focus_time == [0] * 7
    assert stats.monthly_focus_time == [0] * 30


def test_mixed_history(make_session, now):
    sessions = [
        make_session(now - timedelta(hours=3), actual=25),
        make_session(now - timedelta(hours=2), outcome=SessionOutcome.PARTIAL, actual=10),
        make_session(now - timedelta(days=1), actual=25, interruptions=1),
        make_session(now - timedelta(days=2), outcome=SessionOutcome.ABANDONED, actual=5),
    ]

    stats = aggregate(sessions, now=now)

    assert stats.total_sessions == 4
    assert stats.completed_sessions == 2
    assert stats.total_focus_time == 65
    assert stats.average_session_length == pytest.approx(16.25)
    assert stats.completion_rate == pytest.approx(50.0)
    assert stats.current_streak == 2
    assert stats.longest_streak == 2
    assert 0 < stats.productivity_score <= 100


def test_weekly_series_is_oldest_first(make_session, now):
    sessions = [
        make_session(now, actual=25),
        make_session(now - timedelta(hours=1), actual=10),
        make_session(now - timedelta(days=6), actual=50),
        make_session(now - timedelta(days=7), actual=99),
    ]

    series = focus_time_series(sessions, 7, now)

    assert series == [50, 0, 0, 0, 0, 0, 35]


def test_monthly_series_covers_thirty_days(make_session, now):
    sessions = [make_session(now - timedelta(days=29), actual=15)]

    stats = aggregate(sessions, now=now)

    assert len(stats.monthly_focus_time) == 30
    assert stats.monthly_focus_time[0] == 15
    assert sum(stats.weekly_focus_time) == 0


def test_longest_streak_never_below_current(make_session, now):
    sessions = [make_session(now - timedelta(hours=h)) for h in (1, 2, 3)]
    stats = aggregate(sessions, now=now)
    assert stats.current_streak == 3
    assert stats.longest_streak >= stats.current_streak


def test_custom_window_lengths(make_session, now):
    stats = aggregate([make_session(now)], now=now, weekly_days=3, monthly_days=10)
    assert stats.weekly_focus_time == [0, 0, 25]
    assert len(stats.monthly_focus_time) == 10


def test_daily_stats(make_session, now):
    later = make_session(now + timedelta(hours=2), actual=20)
    earlier = make_session(now - timedelta(hours=2), actual=30)
    partial = make_session(now, outcome=SessionOutcome.PARTIAL, actual=10)
    other_day = make_session(now - timedelta(days=1))

    stats = daily_stats([later, other_day, earlier, partial], "2024-05-15")

    assert stats.day == date(2024, 5, 15)
    assert stats.completed_count == 2
    assert stats.total_focus_minutes == 60
    assert stats.average_duration_minutes == 20.0
    assert [s.id for s in stats.sessions] == [earlier.id, partial.id, later.id]


def test_daily_stats_accepts_date_and_datetime(make_session, now):
    sessions = [make_session(now)]
    assert daily_stats(sessions, now.date()).completed_count == 1
    assert daily_stats(sessions, datetime(2024, 5, 15, 23, 59)).completed_count == 1


def test_daily_stats_for_empty_day(make_session, now):
    stats = daily_stats([make_session(now)], date(2024, 1, 1))
    assert stats.sessions == []
    assert stats.average_duration_minutes == 0


def test_daily_stats_rejects_bad_date():
    with pytest.raises(ValueError):
        daily_stats([], "15/05/2024")
