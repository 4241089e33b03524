"""
Request and filter models for the task-management collaborator
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import BaseModel
from .entities import TaskStatus


class CreateTaskRequest(BaseModel):
    title: str
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None
    manual_priority: Optional[int] = None
    priority_score: Optional[float] = Field(default=None, ge=0, le=100)


class UpdateTaskRequest(BaseModel):
    """Partial task update; unset fields are left untouched"""

    title: Optional[str] = None
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None
    manual_priority: Optional[int] = None
    priority_score: Optional[float] = Field(default=None, ge=0, le=100)
    status: Optional[TaskStatus] = None


class TaskFilters(BaseModel):
    status: Optional[TaskStatus] = None
    tags: Optional[List[str]] = None  # Task must carry every listed tag
    due_date_from: Optional[datetime] = None
    due_date_to: Optional[datetime] = None
    priority_min: Optional[float] = None
    priority_max: Optional[float] = None
