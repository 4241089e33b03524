"""Tests for analytics/streak.py: consecutive-day streaks."""

from datetime import datetime, timedelta

from focusflow.analytics.streak import calculate_longest_streak, calculate_streak
from focusflow.models import SessionOutcome

NOW = datetime(2024, 5, 15, 12, 0, 0)


def days_ago(days, hours=0):
    return NOW - timedelta(days=days, hours=hours)


def test_empty_history_has_no_streak():
    assert calculate_streak([], NOW) == 0
    assert calculate_longest_streak([]) == 0


def test_single_session_today(make_session):
    assert calculate_streak([make_session(days_ago(0))], NOW) == 1


def test_sessions_three_days_apart(make_session):
    sessions = [make_session(days_ago(0)), make_session(days_ago(3))]
    assert calculate_streak(sessions, NOW) == 1


def test_three_consecutive_days(make_session):
    sessions = [make_session(days_ago(n)) for n in range(3)]
    assert calculate_streak(sessions, NOW) == 3


def test_gap_ends_the_streak(make_session):
    sessions = [
        make_session(days_ago(0)),
        make_session(days_ago(1)),
        make_session(days_ago(4)),
        make_session(days_ago(5)),
    ]
    assert calculate_streak(sessions, NOW) == 2


def test_stale_history_has_no_current_streak(make_session):
    sessions = [make_session(days_ago(3)), make_session(days_ago(4))]
    assert calculate_streak(sessions, NOW) == 0


def test_yesterday_keeps_the_streak_alive(make_session):
    assert calculate_streak([make_session(days_ago(1, hours=10))], NOW) == 1


def test_unfinished_sessions_are_ignored(make_session):
    sessions = [
        make_session(days_ago(0), outcome=SessionOutcome.ABANDONED),
        make_session(days_ago(1), outcome=SessionOutcome.PARTIAL),
    ]
    assert calculate_streak(sessions, NOW) == 0
    assert calculate_longest_streak(sessions) == 0


def test_input_order_does_not_matter(make_session):
    sessions = [make_session(days_ago(n)) for n in (2, 0, 1)]
    assert calculate_streak(sessions, NOW) == 3


def test_same_day_sessions_each_extend_the_walk(make_session):
    sessions = [make_session(days_ago(0, hours=h)) for h in (1, 2, 3)]
    assert calculate_streak(sessions, NOW) == 3


def test_longest_streak_counts_calendar_days(make_session):
    sessions = [
        make_session(days_ago(0)),
        make_session(days_ago(10)),
        make_session(days_ago(11)),
        make_session(days_ago(11, hours=2)),
        make_session(days_ago(12)),
        make_session(days_ago(20)),
    ]
    assert calculate_longest_streak(sessions) == 3


def test_longest_streak_single_day(make_session):
    assert calculate_longest_streak([make_session(days_ago(7))]) == 1
