"""
Productivity scorer
Turns one finished session into a 0-100 productivity score
"""

from typing import Iterable

from focusflow.models.analytics import ProductivityBreakdown
from focusflow.models.entities import FocusSession, SessionOutcome

COMPLETION_WEIGHT = 0.4
FOCUS_WEIGHT = 0.3
DURATION_WEIGHT = 0.3

# Interruptions at which the focus component reaches zero
INTERRUPTION_LIMIT = 10


def _completion_score(outcome: SessionOutcome) -> float:
    if outcome == SessionOutcome.COMPLETED:
        return 1.0
    elif outcome == SessionOutcome.PARTIAL:
        return 0.7
    else:
        return 0.3


def _focus_score(interruptions_count: int) -> float:
    return max(0.0, 1 - (interruptions_count or 0) / INTERRUPTION_LIMIT)


def _duration_score(session: FocusSession) -> float:
    intended = session.intended_duration_minutes
    actual = session.actual_duration_minutes
    # A zero actual duration counts as unknown
    if intended and actual:
        return max(0.0, min(1.0, actual / intended))
    return 0.5


def score_breakdown(session: FocusSession) -> ProductivityBreakdown:
    """
    Calculate the productivity components of one session

    Components:
    - completion_score: 1.0 completed, 0.7 partial, 0.3 otherwise
    - focus_score: 1 - interruptions / 10, floored at 0
    - duration_score: actual / intended capped at 1 (0.5 when unknown or 0)

    Args:
        session: Focus session to score

    Returns:
        Breakdown including the weighted 0-100 score
    """
    completion = _completion_score(session.outcome)
    focus = _focus_score(session.interruptions_count)
    duration = _duration_score(session)

    score = (
        completion * COMPLETION_WEIGHT
        + focus * FOCUS_WEIGHT
        + duration * DURATION_WEIGHT
    ) * 100

    return ProductivityBreakdown(
        completion_score=completion,
        focus_score=focus,
        duration_score=duration,
        score=min(100.0, max(0.0, score)),
    )


def score_session(session: FocusSession) -> float:
    """Productivity score of one session, within [0, 100]"""
    return score_breakdown(session).score


def average_productivity(sessions: Iterable[FocusSession]) -> float:
    """Mean productivity score across sessions (0 for none)"""
    scores = [score_session(session) for session in sessions]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def get_productivity_level(score: float) -> str:
    """
    Map productivity score to human-readable level

    Args:
        score: Productivity score (0-100)

    Returns:
        "high", "moderate", or "low"
    """
    if score >= 80:
        return "high"
    elif score >= 60:
        return "moderate"
    else:
        return "low"
