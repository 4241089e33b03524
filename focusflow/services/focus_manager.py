"""
Focus session manager

Coordinates one focus session at a time:
task selection -> session timer -> interruption detector -> scoring -> history.

The task board and session history are injected; settings fall back to
the project configuration when not given.
"""

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Union

from focusflow.analytics.scoring import get_productivity_level, score_breakdown
from focusflow.core.errors import (
    NoActiveSessionError,
    NoTaskAvailableError,
    SessionAlreadyActiveError,
    TaskNotFoundError,
)
from focusflow.core.logger import get_logger
from focusflow.core.settings import FocusSettings, get_settings
from focusflow.focus.interruption import AppState, InterruptionDetector
from focusflow.focus.timer import SessionTimer
from focusflow.models.analytics import ProgressStats, SessionSummary
from focusflow.models.entities import FocusSession, SessionOutcome, Task, TaskStatus

from .history import SessionHistory
from .task_board import TaskBoard

logger = get_logger(__name__)

# Statuses a selected task may be in to be picked for the next session
RESUMABLE_STATUSES = (TaskStatus.PENDING, TaskStatus.PAUSED)


class FocusSessionManager:
    """
    Run focus sessions against a task board and record them in a history

    Guarantees:
    1. At most one session is active (running or paused) at a time.
    2. When an asyncio loop is running, the countdown runs as a task that
       is cancelled on pause and on termination.
    3. A finished session is scored and recorded exactly once, whether it
       ended manually or by the countdown reaching zero.
    """

    def __init__(
        self,
        task_board: TaskBoard,
        history: Optional[SessionHistory] = None,
        settings: Optional[FocusSettings] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or get_settings()
        self.task_board = task_board
        self.history = history or SessionHistory(
            weekly_days=self.settings.weekly_window_days,
            monthly_days=self.settings.monthly_window_days,
        )
        self._clock = clock

        self._timer: Optional[SessionTimer] = None
        self._detector: Optional[InterruptionDetector] = None
        self._countdown_task: Optional[asyncio.Task] = None
        self._last_summary: Optional[SessionSummary] = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[FocusSettings] = None,
        tasks: Optional[Iterable[Task]] = None,
        *,
        user_id: str = "",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "FocusSessionManager":
        """
        Build a manager with a task board and history configured from settings

        Args:
            settings: Focus settings (defaults to the active settings)
            tasks: Initial task collection
            user_id: Owner of tasks created on the board
            clock: Time source shared by the board and the timers
        """
        settings = settings or get_settings()
        task_board = TaskBoard(
            tasks,
            user_id=user_id,
            default_estimated_minutes=settings.default_estimated_minutes,
            clock=clock,
        )
        return cls(task_board, settings=settings, clock=clock)

    # ============ State ============

    @property
    def current_timer(self) -> Optional[SessionTimer]:
        return self._timer

    @property
    def countdown_task(self) -> Optional[asyncio.Task]:
        return self._countdown_task

    @property
    def is_active(self) -> bool:
        return self._timer is not None and not self._timer.is_finished

    @property
    def last_summary(self) -> Optional[SessionSummary]:
        return self._last_summary

    # ============ Session control ============

    def start_session(
        self,
        task_id: Optional[str] = None,
        duration_minutes: Optional[int] = None,
    ) -> FocusSession:
        """
        Start a focus session

        Task priority: 1. explicit task_id, 2. selected task while it is
        pending or paused, 3. ranker choice.

        Args:
            task_id: Task to focus on (optional)
            duration_minutes: Intended duration; falls back to the task's
                estimate, then to the configured default

        Returns:
            The in-progress session

        Raises:
            SessionAlreadyActiveError: If a session is running or paused
            NoTaskAvailableError: If no task could be chosen
            TaskNotFoundError: If task_id is unknown
        """
        if self.is_active:
            raise SessionAlreadyActiveError(
                f"Session {self._timer.session_id} is already active"
            )

        task = self._resolve_task(task_id)
        timer = SessionTimer(
            task,
            duration_minutes,
            default_duration_minutes=self.settings.default_session_minutes,
            tick_seconds=self.settings.tick_seconds,
            on_task_status=self.task_board.set_status,
            on_finished=self._handle_finished,
            clock=self._clock,
        )
        self._timer = timer
        self._detector = InterruptionDetector(timer)

        session = timer.start()
        self._schedule_countdown()

        logger.info(
            f"Focus session started: {session.id}, task='{task.title}', "
            f"{session.intended_duration_minutes} min"
        )
        return session

    def pause_session(self) -> None:
        timer = self._require_timer()
        timer.pause()
        self._cancel_countdown()

    def resume_session(self) -> None:
        timer = self._require_timer()
        timer.resume()
        self._schedule_countdown()

    def end_session(
        self, outcome: Union[SessionOutcome, str] = SessionOutcome.COMPLETED
    ) -> FocusSession:
        """
        End the active session with an outcome

        Returns:
            The finished, scored session
        """
        timer = self._require_timer()
        finished = timer.terminate(outcome)
        self._cancel_countdown()

        if self._last_summary is not None and self._last_summary.session.id == finished.id:
            return self._last_summary.session
        return finished

    def tick(self) -> bool:
        """Advance the active countdown by one second (for hosts driving ticks)"""
        if self._timer is None:
            return False
        return self._timer.tick()

    def set_duration(self, minutes: int) -> None:
        """Change the intended duration of the active session (restarts the countdown)"""
        self._require_timer().set_intended_duration(minutes)

    def handle_app_state_change(self, state: Union[AppState, str]) -> bool:
        """Forward a host foreground/background change to the session's detector"""
        if self._detector is None:
            return False
        return self._detector.on_app_state_change(state)

    # ============ Reporting ============

    def get_current_session_info(self) -> Optional[Dict[str, Any]]:
        """Describe the current (or just finished) session, None if there is none"""
        timer = self._timer
        if timer is None:
            return None

        session = timer.session
        return {
            "session_id": timer.session_id,
            "task_id": timer.task.id,
            "task_title": timer.task.title,
            "state": timer.state.value,
            "start_time": session.start_time.isoformat() if session else None,
            "intended_duration_minutes": timer.intended_duration_minutes,
            "time_remaining": timer.time_remaining,
            "formatted_time": timer.formatted_time(),
            "progress": timer.progress,
            "interruptions_count": timer.interruptions_count,
        }

    def get_progress_stats(self, now: Optional[datetime] = None) -> ProgressStats:
        return self.history.get_stats(now)

    # ============ Internal ============

    def _resolve_task(self, task_id: Optional[str]) -> Task:
        if task_id is not None:
            return self.task_board.get_task(task_id)

        # A selection that already finished or was deferred is skipped
        task = self.task_board.selected_task
        if task is None or task.status not in RESUMABLE_STATUSES:
            task = self.task_board.get_next_task()
        if task is None:
            raise NoTaskAvailableError("No task selected and no pending task available")
        return task

    def _require_timer(self) -> SessionTimer:
        if self._timer is None:
            raise NoActiveSessionError("No focus session has been started")
        return self._timer

    def _handle_finished(self, session: FocusSession) -> None:
        """Score, summarize and record a finished session"""
        breakdown = score_breakdown(session)
        scored = session.model_copy(update={"productivity_score": breakdown.score})

        try:
            task = self.task_board.get_task(session.task_id)
        except TaskNotFoundError:
            task = None

        self._last_summary = SessionSummary(
            session=scored,
            task=task,
            productivity_breakdown=breakdown,
            productivity_level=get_productivity_level(breakdown.score),
            next_task=self.task_board.get_next_task(),
        )

        if self._detector is not None:
            self._detector.detach()
        self._cancel_countdown()

        try:
            self.history.add_session(scored)
        except Exception as e:
            logger.error(f"Failed to record session {session.id}: {e}", exc_info=True)

        logger.info(
            f"Focus session finished: {session.id}, outcome={session.outcome.value}, "
            f"score={breakdown.score:.1f}"
        )

    def _schedule_countdown(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, countdown is driven by tick()")
            return

        self._cancel_countdown()
        task = loop.create_task(self._timer.run())
        task.add_done_callback(self._on_countdown_done)
        self._countdown_task = task

    def _cancel_countdown(self) -> None:
        task = self._countdown_task
        self._countdown_task = None
        if task is None or task.done():
            return

        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()
            logger.debug("Cancelled countdown task")

    def _on_countdown_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Countdown task failed: {exc}", exc_info=exc)
