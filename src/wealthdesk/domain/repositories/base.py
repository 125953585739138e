"""Generic CRUD repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

from sqlmodel import SQLModel

EntityT = TypeVar("EntityT", bound=SQLModel)
PatchT = TypeVar("PatchT", bound=SQLModel, contravariant=True)


class EntityRepository(Protocol[EntityT, PatchT]):
    """CRUD contract shared by every entity collection."""

    def list_all(self) -> list[EntityT]:
        """Return every record; empty when nothing was stored yet."""
        ...

    def get_by_id(self, record_id: str) -> Optional[EntityT]:
        """Return the record or None when absent."""
        ...

    def create(self, payload: SQLModel) -> EntityT:
        """Store a new record with a fresh id."""
        ...

    def update(self, record_id: str, patch: PatchT) -> Optional[EntityT]:
        """Merge a patch; None when the id is unknown."""
        ...

    def delete(self, record_id: str) -> None:
        """Remove the record; unknown ids are ignored."""
        ...


class ClientOwnedEntityRepository(EntityRepository[EntityT, PatchT], Protocol[EntityT, PatchT]):
    def list_for_client(self, client_id: str) -> list[EntityT]:
        """Records belonging to one client."""
        ...
