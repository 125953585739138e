"""Shared machinery for repositories stored as one JSON array per slot."""

from __future__ import annotations

import json
import uuid
from typing import Any, ClassVar, Generic, Optional, TypeVar

from pydantic import ValidationError
from sqlmodel import SQLModel

from ...logging_config import get_logger
from ..storage import LocalStore, StorageError

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=SQLModel)
PatchT = TypeVar("PatchT", bound=SQLModel)


def new_id() -> str:
    """Return a fresh globally unique identifier."""
    return uuid.uuid4().hex


def merge_patch(entity: EntityT, patch: SQLModel) -> EntityT:
    """Shallow-merge the explicitly set fields of ``patch`` over ``entity``.

    The merged record is re-validated, so a patch cannot produce a record the
    entity model would reject.
    """
    updates = patch.model_dump(exclude_unset=True)
    return type(entity).model_validate({**entity.model_dump(), **updates})


class JSONCollectionRepository(Generic[EntityT, PatchT]):
    """CRUD over a whole collection serialized into a single store slot.

    Subclasses name the slot and entity model and decide whether new records
    go to the front (newest first) or the back of the collection.
    """

    slot: ClassVar[str]
    model: ClassVar[type[SQLModel]]
    prepend: ClassVar[bool] = False

    def __init__(self, store: LocalStore, *, prefix: str = ""):
        self.store = store
        self.key = f"{prefix}{self.slot}"

    # -- serialization -------------------------------------------------------

    def _load(self) -> list[EntityT]:
        raw = self.store.get_item(self.key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Slot {self.key!r} does not hold valid JSON") from exc
        if not isinstance(items, list):
            raise StorageError(f"Slot {self.key!r} does not hold a collection")
        try:
            return [self.model.model_validate(item) for item in items]  # type: ignore[misc]
        except ValidationError as exc:
            raise StorageError(f"Slot {self.key!r} holds an invalid record") from exc

    def _save(self, records: list[EntityT]) -> None:
        payload = [record.model_dump(mode="json") for record in records]
        self.store.set_item(self.key, json.dumps(payload))

    # -- queries -------------------------------------------------------------

    def list_all(self) -> list[EntityT]:
        """Return the whole collection; an absent slot is an empty collection."""
        return self._load()

    def get_by_id(self, record_id: str) -> Optional[EntityT]:
        for record in self._load():
            if record.id == record_id:  # type: ignore[attr-defined]
                return record
        return None

    # -- mutations -----------------------------------------------------------

    def _build(self, payload: SQLModel) -> EntityT:
        """Turn a create payload into a stored record with a fresh id."""
        data = payload.model_dump()
        data.update(self._stamp())
        data["id"] = new_id()
        return self.model.model_validate(data)  # type: ignore[return-value]

    def _stamp(self) -> dict[str, Any]:
        """Extra fields assigned on create (timestamps, derived history)."""
        return {}

    def create(self, payload: SQLModel) -> EntityT:
        record = self._build(payload)
        with self.store.lock:
            records = self._load()
            records = [record, *records] if self.prepend else [*records, record]
            self._save(records)
        logger.info("Record created", extra={"slot": self.key, "record_id": record.id})  # type: ignore[attr-defined]
        return record

    def _apply(self, current: EntityT, patch: PatchT) -> EntityT:
        return merge_patch(current, patch)

    def update(self, record_id: str, patch: PatchT) -> Optional[EntityT]:
        """Merge ``patch`` into the stored record; None when the id is unknown."""
        with self.store.lock:
            records = self._load()
            for index, current in enumerate(records):
                if current.id == record_id:  # type: ignore[attr-defined]
                    records[index] = self._apply(current, patch)
                    self._save(records)
                    break
            else:
                logger.debug("Update skipped, record not found", extra={"slot": self.key, "record_id": record_id})
                return None
        logger.info(
            "Record updated",
            extra={"slot": self.key, "record_id": record_id, "fields": sorted(patch.model_dump(exclude_unset=True))},
        )
        return records[index]

    def delete(self, record_id: str) -> None:
        with self.store.lock:
            records = self._load()
            remaining = [r for r in records if r.id != record_id]  # type: ignore[attr-defined]
            self._save(remaining)
        if len(remaining) != len(records):
            logger.info("Record deleted", extra={"slot": self.key, "record_id": record_id})


class ClientOwnedRepository(JSONCollectionRepository[EntityT, PatchT]):
    """Collection whose records reference a client by ``client_id``."""

    def list_for_client(self, client_id: str) -> list[EntityT]:
        return [r for r in self._load() if r.client_id == client_id]  # type: ignore[attr-defined]
