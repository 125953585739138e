"""Entity and storage model exports."""

from .client import Client, ClientBase, ClientSegment, ClientStatus, ClientUpdate
from .folio import Folio, FolioBase, FolioUpdate
from .holding import AssetClass, Holding, HoldingBase, HoldingUpdate, PriceSample
from .note import Note, NoteBase, NoteUpdate
from .storage import StorageSlot
from .task import Task, TaskBase, TaskPriority, TaskStatus, TaskUpdate

__all__ = [
    "AssetClass",
    "Client",
    "ClientBase",
    "ClientSegment",
    "ClientStatus",
    "ClientUpdate",
    "Folio",
    "FolioBase",
    "FolioUpdate",
    "Holding",
    "HoldingBase",
    "HoldingUpdate",
    "Note",
    "NoteBase",
    "NoteUpdate",
    "PriceSample",
    "StorageSlot",
    "Task",
    "TaskBase",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
]
