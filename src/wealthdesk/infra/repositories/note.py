"""Note repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ...models.note import Note, NoteUpdate
from .base import ClientOwnedRepository


class LocalNoteRepository(ClientOwnedRepository[Note, NoteUpdate]):
    slot = "notes"
    model = Note
    prepend = True

    def _stamp(self) -> dict[str, Any]:
        return {"created_at": datetime.now()}

    def list_for_client(self, client_id: str) -> list[Note]:
        """Notes for one client, newest first."""
        notes = super().list_for_client(client_id)
        return sorted(notes, key=lambda note: note.created_at, reverse=True)


__all__ = ["LocalNoteRepository"]
