"""
Models for the focus-session runtime and analytics
"""

from .analytics import (
    DailyFocusStats,
    ProductivityBreakdown,
    ProgressStats,
    SessionSummary,
    TaskStats,
)
from .base import BaseModel
from .entities import (
    FocusSession,
    SessionOutcome,
    Task,
    TaskStatus,
    TimerSnapshot,
    TimerState,
)
from .requests import CreateTaskRequest, TaskFilters, UpdateTaskRequest

__all__ = [
    # Base
    "BaseModel",
    # Entities
    "Task",
    "TaskStatus",
    "FocusSession",
    "SessionOutcome",
    "TimerState",
    "TimerSnapshot",
    # Requests
    "CreateTaskRequest",
    "UpdateTaskRequest",
    "TaskFilters",
    # Analytics
    "ProductivityBreakdown",
    "ProgressStats",
    "DailyFocusStats",
    "TaskStats",
    "SessionSummary",
]
