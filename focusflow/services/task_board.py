"""
Task board - in-memory task-management collaborator

Holds the caller-supplied task collection, applies status transitions
requested by session timers, and answers "what next" through the ranker.
"""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from focusflow.core.errors import TaskNotFoundError
from focusflow.core.logger import get_logger
from focusflow.focus.ranker import next_task, rank_tasks
from focusflow.models.analytics import TaskStats
from focusflow.models.entities import Task, TaskStatus
from focusflow.models.requests import CreateTaskRequest, TaskFilters, UpdateTaskRequest

logger = get_logger(__name__)


class TaskBoard:
    """
    In-memory task collection

    Tasks are replaced by updated copies on every mutation, so the
    updated_at timestamp always reflects the latest transition.

    Example:
        board = TaskBoard()
        board.create_task(CreateTaskRequest(title="Write report", priority_score=80))
        task = board.get_next_task()
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        *,
        user_id: str = "",
        default_estimated_minutes: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.user_id = user_id
        self.default_estimated_minutes = default_estimated_minutes
        self._clock = clock or datetime.now
        # Insertion order doubles as the ranker's tie-break order
        self._tasks: Dict[str, Task] = {}
        self._selected_id: Optional[str] = None

        for task in tasks or []:
            self._tasks[task.id] = task

    # ============ CRUD ============

    def create_task(self, request: CreateTaskRequest) -> Task:
        now = self._clock()
        task = Task(
            user_id=self.user_id,
            title=request.title,
            description=request.description,
            priority_score=request.priority_score or 0,
            estimated_minutes=request.estimated_minutes or self.default_estimated_minutes,
            due_date=request.due_date,
            tags=request.tags or [],
            status=TaskStatus.PENDING,
            manual_priority=request.manual_priority or 0,
            created_at=now,
            updated_at=now,
        )
        self._tasks[task.id] = task
        logger.debug(f"Created task {task.id}: '{task.title}'")
        return task

    def add_task(self, task: Task) -> Task:
        """Add an already-built task (e.g. loaded by a persistence collaborator)"""
        self._tasks[task.id] = task
        return task

    def get_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(self, task_id: str, request: UpdateTaskRequest) -> Task:
        """
        Apply a partial update

        Args:
            task_id: Task to update
            request: Fields to change; unset fields are left untouched

        Returns:
            The updated task
        """
        task = self.get_task(task_id)
        updates = request.model_dump(exclude_unset=True, by_alias=False)
        updates["updated_at"] = self._clock()

        updated = task.model_copy(update=updates)
        self._tasks[task_id] = updated
        logger.debug(f"Updated task {task_id}: {sorted(updates)}")
        return updated

    def delete_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        del self._tasks[task_id]
        if self._selected_id == task_id:
            self._selected_id = None
        logger.debug(f"Deleted task {task_id}")
        return task

    def list_tasks(self, filters: Optional[TaskFilters] = None) -> List[Task]:
        """List tasks in insertion order, optionally filtered"""
        tasks = list(self._tasks.values())
        if filters is None:
            return tasks
        return [task for task in tasks if self._matches(task, filters)]

    # ============ Selection and status ============

    def select_task(self, task_id: Optional[str]) -> Optional[Task]:
        """Select the task for the next session (None clears the selection)"""
        if task_id is None:
            self._selected_id = None
            return None
        task = self.get_task(task_id)
        self._selected_id = task_id
        return task

    @property
    def selected_task(self) -> Optional[Task]:
        if self._selected_id is None:
            return None
        return self._tasks.get(self._selected_id)

    def set_status(self, task_id: str, status: TaskStatus) -> Task:
        """Status sink used by session timers"""
        return self.update_task(task_id, UpdateTaskRequest(status=TaskStatus(status)))

    def mark_complete(self, task_id: str) -> Task:
        return self.set_status(task_id, TaskStatus.COMPLETED)

    def mark_in_progress(self, task_id: str) -> Task:
        return self.set_status(task_id, TaskStatus.IN_PROGRESS)

    def mark_paused(self, task_id: str) -> Task:
        return self.set_status(task_id, TaskStatus.PAUSED)

    def mark_deferred(self, task_id: str) -> Task:
        return self.set_status(task_id, TaskStatus.DEFERRED)

    # ============ Ranking and statistics ============

    def get_next_task(self) -> Optional[Task]:
        return next_task(self._tasks.values())

    def get_ranked_tasks(self) -> List[Task]:
        return rank_tasks(self._tasks.values())

    def get_task_stats(self) -> TaskStats:
        tasks = list(self._tasks.values())
        total = len(tasks)
        return TaskStats(
            total_tasks=total,
            completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
            pending_tasks=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
            average_priority=(
                sum(t.priority_score for t in tasks) / total if total > 0 else 0
            ),
            total_estimated_time=sum(t.estimated_minutes or 0 for t in tasks),
        )

    @staticmethod
    def _matches(task: Task, filters: TaskFilters) -> bool:
        if filters.status is not None and task.status != filters.status:
            return False
        if filters.tags and not set(filters.tags).issubset(task.tags):
            return False
        if filters.priority_min is not None and task.priority_score < filters.priority_min:
            return False
        if filters.priority_max is not None and task.priority_score > filters.priority_max:
            return False
        if filters.due_date_from is not None or filters.due_date_to is not None:
            if task.due_date is None:
                return False
            if filters.due_date_from is not None and task.due_date < filters.due_date_from:
                return False
            if filters.due_date_to is not None and task.due_date > filters.due_date_to:
                return False
        return True

    def __len__(self) -> int:
        return len(self._tasks)
