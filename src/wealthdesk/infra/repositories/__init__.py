"""Repository implementations over the local store."""

from .base import ClientOwnedRepository, JSONCollectionRepository, merge_patch, new_id
from .client import LocalClientRepository
from .folio import LocalFolioRepository
from .holding import LocalHoldingRepository
from .note import LocalNoteRepository
from .task import LocalTaskRepository

__all__ = [
    "ClientOwnedRepository",
    "LocalClientRepository",
    "LocalFolioRepository",
    "LocalHoldingRepository",
    "JSONCollectionRepository",
    "LocalNoteRepository",
    "LocalTaskRepository",
    "merge_patch",
    "new_id",
]
