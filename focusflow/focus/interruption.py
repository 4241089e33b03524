"""
Interruption detector for focus sessions

Observes the host application's foreground/background signal and
attributes a return to the foreground as an interruption of the bound
session, but only while its timer is running.
"""

import time
from enum import Enum
from typing import Any, Dict, Optional, Union

from focusflow.core.logger import get_logger

from .timer import SessionTimer

logger = get_logger(__name__)


class AppState(str, Enum):
    """Host application visibility states"""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"

    @property
    def is_away(self) -> bool:
        return self in (AppState.INACTIVE, AppState.BACKGROUND)


class InterruptionDetector:
    """Feeds foreground returns into one session timer

    Wire one detector per session; a detached detector ignores every signal.
    """

    def __init__(
        self,
        timer: SessionTimer,
        initial_state: Union[AppState, str] = AppState.ACTIVE,
    ):
        """
        Initialize interruption detector

        Args:
            timer: Session timer receiving the interruptions
            initial_state: Application state at the time of wiring
        """
        self._timer: Optional[SessionTimer] = timer
        self._app_state = AppState(initial_state)
        self._transitions_seen: int = 0
        self._interruptions_attributed: int = 0
        self._last_change_time: float = time.time()

    @property
    def app_state(self) -> AppState:
        return self._app_state

    @property
    def is_attached(self) -> bool:
        return self._timer is not None

    def on_app_state_change(self, next_state: Union[AppState, str]) -> bool:
        """
        Handle an application state change

        Args:
            next_state: New application state

        Returns:
            True if the change was counted as an interruption
        """
        next_state = AppState(next_state)
        previous = self._app_state
        self._app_state = next_state

        if next_state == previous:
            return False

        self._transitions_seen += 1
        self._last_change_time = time.time()

        if not (previous.is_away and next_state == AppState.ACTIVE):
            return False

        if self._timer is None:
            logger.debug("Foreground return ignored: detector detached")
            return False

        counted = self._timer.record_interruption()
        if counted:
            self._interruptions_attributed += 1
        else:
            logger.debug(
                f"Foreground return ignored: timer is {self._timer.state.value}"
            )
        return counted

    def on_background(self) -> bool:
        return self.on_app_state_change(AppState.BACKGROUND)

    def on_foreground(self) -> bool:
        return self.on_app_state_change(AppState.ACTIVE)

    def detach(self) -> None:
        """Unbind from the timer once its session is over"""
        self._timer = None

    def get_stats(self) -> Dict[str, Any]:
        """Get detector statistics for debugging"""
        return {
            "app_state": self._app_state.value,
            "attached": self.is_attached,
            "transitions_seen": self._transitions_seen,
            "interruptions_attributed": self._interruptions_attributed,
            "seconds_since_last_change": round(
                time.time() - self._last_change_time, 2
            ),
        }
