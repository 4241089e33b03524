"""
Session timer
Per-session countdown state machine with start/pause/resume/terminate
transitions and completion detection.

The timer is framework agnostic: `tick()` can be driven by any scheduler,
and `run()` drives it from an asyncio event loop. Collaborators are
injected as callbacks:

- on_task_status(task_id, status): task-state mutation requests
- on_tick(time_remaining): countdown observers
- on_finished(session): receives the finished FocusSession
"""

import asyncio
import math
import threading
from datetime import datetime
from typing import Any, Callable, Optional, Union

from focusflow.core.errors import InvalidTransition
from focusflow.core.logger import get_logger
from focusflow.models.entities import (
    FocusSession,
    SessionOutcome,
    Task,
    TaskStatus,
    TimerSnapshot,
    TimerState,
    new_id,
)

logger = get_logger(__name__)

DEFAULT_SESSION_MINUTES = 25

TaskStatusCallback = Callable[[str, TaskStatus], None]
TickCallback = Callable[[int], None]
FinishedCallback = Callable[[FocusSession], None]

# Task status requested from the task collaborator for each session outcome
OUTCOME_TASK_STATUS = {
    SessionOutcome.COMPLETED: TaskStatus.COMPLETED,
    SessionOutcome.PARTIAL: TaskStatus.DEFERRED,
    SessionOutcome.ABANDONED: TaskStatus.DEFERRED,
}

_OUTCOME_STATES = {
    SessionOutcome.COMPLETED: TimerState.COMPLETED,
    SessionOutcome.PARTIAL: TimerState.PARTIAL,
    SessionOutcome.ABANDONED: TimerState.ABANDONED,
}


def is_valid_duration(value: Any) -> bool:
    """A valid intended duration is a positive integer number of minutes"""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def resolve_duration(
    requested: Any = None,
    task: Optional[Task] = None,
    default: int = DEFAULT_SESSION_MINUTES,
) -> int:
    """
    Resolve the intended duration of a session

    Priority: 1. explicit request, 2. task's estimated minutes, 3. default.
    Invalid values are skipped rather than raised.

    Args:
        requested: Caller-chosen duration in minutes (optional)
        task: Task the session is bound to (optional)
        default: Fallback duration in minutes

    Returns:
        Duration in minutes
    """
    if requested is not None:
        if is_valid_duration(requested):
            return requested
        logger.warning(f"Invalid intended duration {requested!r}, falling back")

    if task is not None and is_valid_duration(task.estimated_minutes):
        return task.estimated_minutes

    return default


class SessionTimer:
    """Countdown state machine for one focus session

    One timer instance runs exactly one session; IDLE is left once and the
    outcome states are terminal.
    """

    def __init__(
        self,
        task: Task,
        intended_duration_minutes: Optional[int] = None,
        *,
        user_id: Optional[str] = None,
        default_duration_minutes: int = DEFAULT_SESSION_MINUTES,
        tick_seconds: float = 1.0,
        on_task_status: Optional[TaskStatusCallback] = None,
        on_tick: Optional[TickCallback] = None,
        on_finished: Optional[FinishedCallback] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.task = task
        self.user_id = user_id if user_id is not None else task.user_id
        self.tick_seconds = float(tick_seconds)
        self.on_task_status = on_task_status
        self.on_tick = on_tick
        self.on_finished = on_finished

        self._clock = clock or datetime.now
        self._default_duration = default_duration_minutes
        self._intended_minutes = resolve_duration(
            intended_duration_minutes, task, default_duration_minutes
        )

        self._state = TimerState.IDLE
        self._time_remaining = self._intended_minutes * 60
        self._interruptions = 0
        # Bumped on every transition; countdown loops from an older
        # generation stop without ticking.
        self._generation = 0
        self._lock = threading.RLock()

        self._session_id = new_id()
        self._start_time: Optional[datetime] = None
        self._finished: Optional[FocusSession] = None

    # ------------------------------------------------------------------ #
    # Observers
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def intended_duration_minutes(self) -> int:
        return self._intended_minutes

    @property
    def time_remaining(self) -> int:
        """Seconds left on the countdown"""
        return self._time_remaining

    @property
    def interruptions_count(self) -> int:
        return self._interruptions

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def total_seconds(self) -> int:
        return self._intended_minutes * 60

    @property
    def elapsed_seconds(self) -> int:
        return self.total_seconds - self._time_remaining

    @property
    def progress(self) -> float:
        """Elapsed fraction of the countdown, always within [0, 1]"""
        if self.total_seconds <= 0:
            return 0.0
        return min(1.0, max(0.0, self.elapsed_seconds / self.total_seconds))

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self._state.is_terminal

    @property
    def session(self) -> Optional[FocusSession]:
        """Current view of the session (None before start)"""
        with self._lock:
            if self._finished is not None:
                return self._finished
            if self._start_time is None:
                return None
            return self._build_session(SessionOutcome.IN_PROGRESS)

    def formatted_time(self) -> str:
        """Remaining time formatted as MM:SS"""
        minutes = self._time_remaining // 60
        seconds = self._time_remaining % 60
        return f"{minutes:02d}:{seconds:02d}"

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return TimerSnapshot(
                state=self._state,
                time_remaining=self._time_remaining,
                total_seconds=self.total_seconds,
                interruptions_count=self._interruptions,
                progress=self.progress,
                session_id=self._session_id if self._start_time else None,
                task_id=self.task.id,
            )

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def start(self) -> FocusSession:
        """Idle -> Running"""
        with self._lock:
            self._require("start", TimerState.IDLE)
            self._start_time = self._clock()
            self._time_remaining = self._intended_minutes * 60
            self._state = TimerState.RUNNING
            self._generation += 1
            logger.debug(
                f"Session {self._session_id} started on task {self.task.id} "
                f"({self._intended_minutes} min)"
            )
            self._notify(self.on_task_status, self.task.id, TaskStatus.IN_PROGRESS)
            return self._build_session(SessionOutcome.IN_PROGRESS)

    def tick(self) -> bool:
        """
        Advance the countdown by one second

        Ticks delivered outside RUNNING are ignored so that a late scheduler
        callback cannot revive a paused or terminated session.

        Returns:
            True if the tick was applied
        """
        with self._lock:
            if self._state != TimerState.RUNNING:
                return False

            self._time_remaining = max(0, self._time_remaining - 1)
            self._notify(self.on_tick, self._time_remaining)

            if self._time_remaining == 0:
                self._finish(SessionOutcome.COMPLETED)
            return True

    def pause(self) -> None:
        """Running -> Paused; asks the task collaborator to mark the task paused"""
        with self._lock:
            self._require("pause", TimerState.RUNNING)
            self._state = TimerState.PAUSED
            self._generation += 1
            logger.debug(
                f"Session {self._session_id} paused at {self.formatted_time()}"
            )
            self._notify(self.on_task_status, self.task.id, TaskStatus.PAUSED)

    def resume(self) -> None:
        """Paused -> Running, continuing from the preserved remaining time"""
        with self._lock:
            self._require("resume", TimerState.PAUSED)
            self._state = TimerState.RUNNING
            self._generation += 1
            logger.debug(
                f"Session {self._session_id} resumed at {self.formatted_time()}"
            )
            self._notify(self.on_task_status, self.task.id, TaskStatus.IN_PROGRESS)

    def terminate(self, outcome: Union[SessionOutcome, str]) -> FocusSession:
        """
        Running/Paused -> Completed/Partial/Abandoned

        Args:
            outcome: Terminal outcome (completed, partial or abandoned)

        Returns:
            The finished FocusSession

        Raises:
            ValueError: If outcome is not a terminal outcome
            InvalidTransition: If the timer is not running or paused
        """
        outcome = SessionOutcome(outcome)
        if outcome not in _OUTCOME_STATES:
            raise ValueError(f"Not a terminal session outcome: {outcome.value}")

        with self._lock:
            self._require("terminate", TimerState.RUNNING, TimerState.PAUSED)
            return self._finish(outcome)

    def set_intended_duration(self, minutes: Any) -> None:
        """
        Change the intended duration

        The countdown restarts from the new total instead of being prorated
        against the time already elapsed.
        """
        with self._lock:
            if self._state.is_terminal:
                raise InvalidTransition("change the duration of", self._state.value)

            self._intended_minutes = resolve_duration(
                minutes, None, self._default_duration
            )
            self._time_remaining = self._intended_minutes * 60
            logger.debug(
                f"Session {self._session_id} duration set to "
                f"{self._intended_minutes} min, countdown restarted"
            )

    def record_interruption(self) -> bool:
        """
        Attribute one interruption to the in-flight session

        Returns:
            True if counted (only while RUNNING)
        """
        with self._lock:
            if self._state != TimerState.RUNNING:
                return False
            self._interruptions += 1
            logger.debug(
                f"Session {self._session_id} interruption #{self._interruptions}"
            )
            return True

    async def run(self) -> Optional[FocusSession]:
        """
        Drive the countdown from the running event loop

        Ticks every `tick_seconds` until the timer leaves RUNNING or another
        transition bumps the generation. Start a new `run()` after resume.

        Returns:
            The finished session if the countdown ended it, else None
        """
        generation = self._generation
        while self._state == TimerState.RUNNING and self._generation == generation:
            await asyncio.sleep(self.tick_seconds)
            with self._lock:
                if self._state != TimerState.RUNNING or self._generation != generation:
                    break
                self.tick()
        return self._finished

    # ------------------------------------------------------------------ #
    # Internal
    # ------------------------------------------------------------------ #

    def _require(self, action: str, *allowed: TimerState) -> None:
        if self._state not in allowed:
            raise InvalidTransition(action, self._state.value)

    def _finish(self, outcome: SessionOutcome) -> FocusSession:
        self._generation += 1
        self._state = _OUTCOME_STATES[outcome]

        session = self._build_session(outcome, end_time=self._clock())
        self._finished = session

        logger.info(
            f"Session {self._session_id} finished: outcome={outcome.value}, "
            f"actual={session.actual_duration_minutes}/"
            f"{session.intended_duration_minutes} min, "
            f"interruptions={session.interruptions_count}"
        )

        # The session is final before any collaborator sees it
        self._notify(self.on_task_status, self.task.id, OUTCOME_TASK_STATUS[outcome])
        self._notify(self.on_finished, session)
        return session

    def _build_session(
        self, outcome: SessionOutcome, end_time: Optional[datetime] = None
    ) -> FocusSession:
        actual = None
        if outcome != SessionOutcome.IN_PROGRESS:
            actual = self._intended_minutes - math.ceil(self._time_remaining / 60)

        return FocusSession(
            id=self._session_id,
            user_id=self.user_id,
            task_id=self.task.id,
            start_time=self._start_time,
            end_time=end_time,
            intended_duration_minutes=self._intended_minutes,
            actual_duration_minutes=actual,
            interruptions_count=self._interruptions,
            outcome=outcome,
            created_at=self._start_time,
        )

    def _notify(self, callback: Optional[Callable], *args: Any) -> None:
        """Invoke a collaborator callback without letting it corrupt timer state"""
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.error(
                f"Collaborator callback failed for session {self._session_id}: {e}",
                exc_info=True,
            )
