"""Client workflows: search, archiving and note logging."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional

from ..domain.repositories import ClientRepository, NoteRepository
from ..logging_config import get_logger
from ..models.client import Client, ClientStatus, ClientUpdate
from ..models.note import Note, NoteBase

logger = get_logger(__name__)


def search_clients(
    clients: Iterable[Client],
    query: str = "",
    status: Optional[ClientStatus] = None,
) -> list[Client]:
    """Filter by a case-insensitive match on name, company or email and an optional status."""
    needle = query.strip().lower()
    matches = []
    for client in clients:
        if status is not None and client.status != status:
            continue
        if needle and not any(
            needle in value.lower() for value in (client.name, client.company, client.email)
        ):
            continue
        matches.append(client)
    return matches


def archive_client(repo: ClientRepository, client_id: str) -> Optional[Client]:
    """Mark the client Inactive. Related records are kept."""
    client = repo.update(client_id, ClientUpdate(status=ClientStatus.INACTIVE))
    if client is not None:
        logger.info("Client archived", extra={"client_id": client_id})
    return client


def log_note(
    *,
    notes: NoteRepository,
    clients: ClientRepository,
    client_id: str,
    content: str,
    author: str,
    now: Callable[[], datetime] = datetime.now,
) -> Note:
    """Record a note and move the client's ``last_contact`` to now."""
    note = notes.create(NoteBase(client_id=client_id, content=content, created_by=author))
    if clients.update(client_id, ClientUpdate(last_contact=now())) is None:
        logger.warning("Note logged for unknown client", extra={"client_id": client_id})
    return note


__all__ = ["archive_client", "log_note", "search_clients"]
