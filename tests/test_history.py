"""Tests for services/history.py: finished-session record."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from focusflow.core.errors import SessionNotFoundError
from focusflow.models import SessionOutcome
from focusflow.services import SessionHistory


def test_add_and_get_session(make_session):
    history = SessionHistory()
    session = make_session()

    history.add_session(session)

    assert len(history) == 1
    assert history.get_session(session.id) == session
    assert list(history) == [session]


def test_in_progress_session_is_rejected(make_session):
    history = SessionHistory()
    with pytest.raises(ValueError, match="still in progress"):
        history.add_session(make_session(outcome=SessionOutcome.IN_PROGRESS, actual=None))
    assert len(history) == 0


def test_unknown_session_raises():
    with pytest.raises(SessionNotFoundError):
        SessionHistory().get_session("missing")


def test_get_sessions_filters(make_session, now):
    report = make_session(now - timedelta(days=2), task_id="report")
    partial = make_session(now, outcome=SessionOutcome.PARTIAL, task_id="report")
    gym = make_session(now, task_id="gym")
    history = SessionHistory([report, partial, gym])

    assert history.get_sessions(task_id="report") == [report, partial]
    assert history.get_sessions(outcome="partial") == [partial]
    assert history.get_sessions(since=now - timedelta(hours=1)) == [partial, gym]
    assert history.get_sessions() == [report, partial, gym]


def test_annotate_session_replaces_record(make_session):
    session = make_session(interruptions=2)
    history = SessionHistory([session])

    annotated = history.annotate_session(
        session.id, subjective_difficulty=7, distraction_notes="Slack pings"
    )

    assert annotated.subjective_difficulty == 7
    assert annotated.distraction_notes == "Slack pings"
    assert annotated.interruptions_count == 2
    assert annotated.start_time == session.start_time
    assert history.get_session(session.id) is annotated
    assert session.subjective_difficulty is None


@pytest.mark.parametrize("difficulty", [0, 11])
def test_annotate_rejects_out_of_range_difficulty(make_session, difficulty):
    session = make_session()
    history = SessionHistory([session])

    with pytest.raises(ValidationError):
        history.annotate_session(session.id, subjective_difficulty=difficulty)
    assert history.get_session(session.id) is session


def test_stats_are_recomputed_from_history(make_session, now):
    history = SessionHistory()
    assert history.get_stats(now).total_sessions == 0

    history.add_session(make_session(now))
    history.add_session(make_session(now - timedelta(days=1), actual=10))

    stats = history.get_stats(now)
    assert stats.total_sessions == 2
    assert stats.total_focus_time == 35
    assert stats.weekly_focus_time[-2:] == [10, 25]


def test_daily_stats(make_session, now):
    history = SessionHistory([make_session(now), make_session(now - timedelta(days=1))])
    stats = history.get_daily_stats(now.date())
    assert stats.completed_count == 1
    assert stats.total_focus_minutes == 25
