"""Note repository protocol."""

from __future__ import annotations

from ...models.note import Note, NoteUpdate
from .base import ClientOwnedEntityRepository

NoteRepository = ClientOwnedEntityRepository[Note, NoteUpdate]
