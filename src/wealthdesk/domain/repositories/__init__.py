"""Repository protocol definitions for domain layer."""

from .base import ClientOwnedEntityRepository, EntityRepository
from .client import ClientRepository
from .folio import FolioRepository
from .holding import HoldingRepository
from .note import NoteRepository
from .task import TaskRepository

__all__ = [
    "ClientOwnedEntityRepository",
    "ClientRepository",
    "EntityRepository",
    "FolioRepository",
    "HoldingRepository",
    "NoteRepository",
    "TaskRepository",
]
