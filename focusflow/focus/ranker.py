"""
Task priority ranker
Selects the next task to work on from a pool of tasks
"""

from typing import Iterable, List, Optional

from focusflow.models.entities import Task, TaskStatus


def rank_tasks(tasks: Iterable[Task]) -> List[Task]:
    """
    Order pending tasks by priority score, highest first

    Only tasks with status PENDING are eligible. Ties keep their input
    order (the sort is stable), so the earliest-supplied task wins.

    Args:
        tasks: Any task collection

    Returns:
        Pending tasks, most urgent first
    """
    pending = [task for task in tasks if task.status == TaskStatus.PENDING]
    return sorted(pending, key=lambda task: task.priority_score, reverse=True)


def next_task(tasks: Iterable[Task]) -> Optional[Task]:
    """
    Select the pending task with the highest priority score

    Tie-break: the first such task in input order.

    Returns:
        The selected task, or None when no pending task exists
    """
    best: Optional[Task] = None
    for task in tasks:
        if task.status != TaskStatus.PENDING:
            continue
        if best is None or task.priority_score > best.priority_score:
            best = task
    return best
