"""
Data entity model definitions
Define core data structures of the focus-session runtime
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from .base import BaseModel


def new_id() -> str:
    return str(uuid.uuid4())


# ============ Enumerations ============


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    DEFERRED = "deferred"


class SessionOutcome(str, Enum):
    """Terminal classification of a focus session"""

    COMPLETED = "completed"
    PARTIAL = "partial"
    ABANDONED = "abandoned"
    IN_PROGRESS = "in-progress"


class TimerState(str, Enum):
    """
    States of one session timer.

    IDLE -> RUNNING -> {PAUSED <-> RUNNING} -> {COMPLETED | PARTIAL | ABANDONED}
    """

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    PARTIAL = "partial"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self in (TimerState.COMPLETED, TimerState.PARTIAL, TimerState.ABANDONED)


# ============ Task ============


class Task(BaseModel):
    """Task model - one unit of work that focus sessions are run against"""

    id: str = Field(default_factory=new_id)
    user_id: str = ""
    title: str
    description: Optional[str] = None
    priority_score: float = Field(default=0, ge=0, le=100)  # Higher = more urgent
    estimated_minutes: Optional[int] = 30
    status: TaskStatus = TaskStatus.PENDING
    tags: List[str] = Field(default_factory=list)
    due_date: Optional[datetime] = None
    manual_priority: int = 0  # User override weight
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


# ============ Focus Session ============


class FocusSession(BaseModel):
    """Focus session model - one timed, single-task focus interval

    Frozen: the timer publishes a new copy on every change, so a finished
    session handed to a collaborator can never be mutated in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    user_id: str = ""
    task_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    intended_duration_minutes: int = Field(gt=0)
    actual_duration_minutes: Optional[int] = None
    interruptions_count: int = Field(default=0, ge=0)
    outcome: SessionOutcome = SessionOutcome.IN_PROGRESS
    subjective_difficulty: Optional[int] = Field(default=None, ge=1, le=10)
    distraction_notes: Optional[str] = None
    productivity_score: Optional[float] = Field(default=None, ge=0, le=100)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_finished(self) -> bool:
        return self.outcome != SessionOutcome.IN_PROGRESS


class TimerSnapshot(BaseModel):
    """Serializable state of a session timer"""

    state: TimerState
    time_remaining: int  # seconds
    total_seconds: int
    interruptions_count: int
    progress: float  # 0.0 - 1.0
    session_id: Optional[str] = None
    task_id: Optional[str] = None
