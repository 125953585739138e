"""Task repository protocol."""

from __future__ import annotations

from ...models.task import Task, TaskUpdate
from .base import ClientOwnedEntityRepository

TaskRepository = ClientOwnedEntityRepository[Task, TaskUpdate]
