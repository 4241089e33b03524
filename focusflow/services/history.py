"""
Session history - in-memory record of finished focus sessions

Progress statistics are always recomputed from the full history.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from focusflow.analytics.progress import (
    MONTHLY_WINDOW_DAYS,
    WEEKLY_WINDOW_DAYS,
    aggregate,
    daily_stats,
)
from focusflow.core.errors import SessionNotFoundError
from focusflow.core.logger import get_logger
from focusflow.models.analytics import DailyFocusStats, ProgressStats
from focusflow.models.entities import FocusSession, SessionOutcome

logger = get_logger(__name__)


class SessionHistory:
    """Ordered collection of finished sessions"""

    def __init__(
        self,
        sessions: Optional[Iterable[FocusSession]] = None,
        *,
        weekly_days: int = WEEKLY_WINDOW_DAYS,
        monthly_days: int = MONTHLY_WINDOW_DAYS,
    ):
        self.weekly_days = weekly_days
        self.monthly_days = monthly_days
        self._sessions: List[FocusSession] = list(sessions or [])

    def add_session(self, session: FocusSession) -> FocusSession:
        """
        Append a finished session

        Raises:
            ValueError: If the session has no terminal outcome yet
        """
        if not session.is_finished:
            raise ValueError(f"Session {session.id} is still in progress")
        self._sessions.append(session)
        logger.debug(
            f"Recorded session {session.id} ({session.outcome.value}), "
            f"history size {len(self._sessions)}"
        )
        return session

    def get_session(self, session_id: str) -> FocusSession:
        for session in self._sessions:
            if session.id == session_id:
                return session
        raise SessionNotFoundError(session_id)

    def get_sessions(
        self,
        task_id: Optional[str] = None,
        outcome: Optional[Union[SessionOutcome, str]] = None,
        since: Optional[datetime] = None,
    ) -> List[FocusSession]:
        """Sessions in recording order, optionally filtered"""
        sessions = self._sessions
        if task_id is not None:
            sessions = [s for s in sessions if s.task_id == task_id]
        if outcome is not None:
            outcome = SessionOutcome(outcome)
            sessions = [s for s in sessions if s.outcome == outcome]
        if since is not None:
            sessions = [s for s in sessions if s.start_time >= since]
        return list(sessions)

    def annotate_session(
        self,
        session_id: str,
        subjective_difficulty: Optional[int] = None,
        distraction_notes: Optional[str] = None,
    ) -> FocusSession:
        """
        Attach the user's after-session feedback

        The stored record is replaced by a validated copy; timing, outcome
        and interruption data are never changed.

        Raises:
            SessionNotFoundError: If no session has this id
            pydantic.ValidationError: If difficulty is outside 1-10
        """
        session = self.get_session(session_id)
        data = session.model_dump(by_alias=False)
        if subjective_difficulty is not None:
            data["subjective_difficulty"] = subjective_difficulty
        if distraction_notes is not None:
            data["distraction_notes"] = distraction_notes

        annotated = FocusSession.model_validate(data)
        self._sessions = [
            annotated if s.id == session_id else s for s in self._sessions
        ]
        logger.debug(f"Annotated session {session_id}")
        return annotated

    def get_stats(self, now: Optional[datetime] = None) -> ProgressStats:
        return aggregate(
            self._sessions,
            now=now,
            weekly_days=self.weekly_days,
            monthly_days=self.monthly_days,
        )

    def get_daily_stats(self, day: Union[date, str]) -> DailyFocusStats:
        return daily_stats(self._sessions, day)

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self):
        return iter(list(self._sessions))
