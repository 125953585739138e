"""Task board helpers."""

from __future__ import annotations

from typing import Iterable, Optional

from ..domain.repositories import TaskRepository
from ..models.task import Task, TaskStatus, TaskUpdate

_NEXT_STATUS = {
    TaskStatus.PENDING: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.COMPLETED,
}


def next_status(status: TaskStatus) -> TaskStatus:
    return _NEXT_STATUS[status]


def advance_task(repo: TaskRepository, task_id: str) -> Optional[Task]:
    """Move a task one column to the right; completed tasks stay completed."""
    task = repo.get_by_id(task_id)
    if task is None:
        return None
    if task.status == TaskStatus.COMPLETED:
        return task
    return repo.update(task_id, TaskUpdate(status=next_status(task.status)))


def group_tasks_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    board: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
    for task in tasks:
        board[task.status].append(task)
    return board


def pending_tasks_for_client(tasks: Iterable[Task], client_id: str) -> list[Task]:
    """Tasks for the client that are not completed yet."""
    return [t for t in tasks if t.client_id == client_id and t.status != TaskStatus.COMPLETED]


def upcoming_tasks(tasks: Iterable[Task], limit: int = 5) -> list[Task]:
    open_tasks = [t for t in tasks if t.status != TaskStatus.COMPLETED]
    return sorted(open_tasks, key=lambda t: t.due_date)[:limit]


__all__ = [
    "advance_task",
    "group_tasks_by_status",
    "next_status",
    "pending_tasks_for_client",
    "upcoming_tasks",
]
