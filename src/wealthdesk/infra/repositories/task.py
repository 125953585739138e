"""Task repository."""

from __future__ import annotations

from ...models.task import Task, TaskUpdate
from .base import ClientOwnedRepository


class LocalTaskRepository(ClientOwnedRepository[Task, TaskUpdate]):
    slot = "tasks"
    model = Task


__all__ = ["LocalTaskRepository"]
