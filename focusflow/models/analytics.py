"""
Derived analytics models
Values computed from a session history; never mutated independently
"""

from datetime import date
from typing import List, Optional

from pydantic import Field

from .base import BaseModel
from .entities import FocusSession, Task


class ProductivityBreakdown(BaseModel):
    """Component scores of one session's productivity score"""

    completion_score: float
    focus_score: float
    duration_score: float
    score: float  # 0 - 100


class ProgressStats(BaseModel):
    """Summary statistics folded from the full session history"""

    total_sessions: int = 0
    completed_sessions: int = 0
    total_focus_time: int = 0  # minutes
    average_session_length: float = 0
    completion_rate: float = 0  # percent
    current_streak: int = 0
    longest_streak: int = 0
    productivity_score: float = 0  # running average
    weekly_focus_time: List[int] = Field(default_factory=list)
    monthly_focus_time: List[int] = Field(default_factory=list)


class DailyFocusStats(BaseModel):
    """Focus statistics for one calendar day"""

    day: date
    completed_count: int
    total_focus_minutes: int
    average_duration_minutes: float
    sessions: List[FocusSession]


class TaskStats(BaseModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    average_priority: float
    total_estimated_time: int  # minutes


class SessionSummary(BaseModel):
    """Outcome of a finished session as presented to reporting surfaces"""

    session: FocusSession
    task: Optional[Task] = None
    productivity_breakdown: ProductivityBreakdown
    productivity_level: str
    next_task: Optional[Task] = None
