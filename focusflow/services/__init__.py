"""
Services - in-memory collaborators and the session coordinator
"""

from .focus_manager import FocusSessionManager
from .history import SessionHistory
from .task_board import TaskBoard

__all__ = ["FocusSessionManager", "SessionHistory", "TaskBoard"]
