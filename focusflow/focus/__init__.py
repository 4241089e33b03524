"""
Focus module - session runtime

Main components:
- next_task / rank_tasks: pick the next pending task by priority
- SessionTimer: countdown state machine for one session
- InterruptionDetector: attributes foreground returns to a running session
"""

from .interruption import AppState, InterruptionDetector
from .ranker import next_task, rank_tasks
from .timer import (
    DEFAULT_SESSION_MINUTES,
    OUTCOME_TASK_STATUS,
    SessionTimer,
    is_valid_duration,
    resolve_duration,
)

__all__ = [
    "next_task",
    "rank_tasks",
    "SessionTimer",
    "DEFAULT_SESSION_MINUTES",
    "OUTCOME_TASK_STATUS",
    "is_valid_duration",
    "resolve_duration",
    "AppState",
    "InterruptionDetector",
]
