"""
Error taxonomy for the focus-session core
"""

from typing import Optional


class FocusFlowError(Exception):
    """Base class for all FocusFlow errors"""


class InvalidTransition(FocusFlowError):
    """A timer operation was invoked from a state that does not allow it"""

    def __init__(self, action: str, state: str, message: Optional[str] = None):
        self.action = action
        self.state = state
        super().__init__(message or f"Cannot {action} a timer in state '{state}'")


class InvalidDuration(FocusFlowError):
    """A non-positive or missing intended duration.

    The timer resolves this locally by substituting the default duration;
    the class exists so callers validating input up front can raise it.
    """


class TaskNotFoundError(FocusFlowError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class SessionNotFoundError(FocusFlowError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class NoTaskAvailableError(FocusFlowError):
    """No task is selected and no pending task exists"""


class SessionAlreadyActiveError(FocusFlowError):
    """A focus session is already running or paused"""


class NoActiveSessionError(FocusFlowError):
    """An operation needed an active focus session but none exists"""
