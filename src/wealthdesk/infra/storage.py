"""Local key-value store holding serialized collections.

Every slot maps a string key to a text blob. Repositories read and write
whole collections through this facade; nothing else touches the table.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import select

from ..config import BaseConfig
from ..logging_config import get_logger
from ..models.storage import StorageSlot
from .database import SessionFactory, create_db_engine, create_session_factory, init_database

logger = get_logger(__name__)


class StorageError(RuntimeError):
    """Raised when a slot holds data that cannot be deserialized."""


class StoreClosedError(StorageError):
    """Raised when a closed store is used."""


class LocalStore:
    """String-keyed slot storage backed by a SQLite table.

    The store is opened once at startup and passed to repositories. ``lock``
    is held by callers around read-modify-write sequences so threaded use
    keeps a single writer per sequence.
    """

    def __init__(self, config: BaseConfig | None = None, *, engine: Engine | None = None):
        self.config = config or BaseConfig()
        self._engine = engine
        self._owns_engine = engine is None
        self._session_factory: Optional[SessionFactory] = None
        self.lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._session_factory is not None

    def open(self) -> "LocalStore":
        if self.is_open:
            return self
        if self._engine is None:
            self._engine = create_db_engine(self.config)
        init_database(self._engine)
        self._session_factory = create_session_factory(self._engine)
        logger.debug("Store opened", extra={"url": str(self._engine.url)})
        return self

    def close(self) -> None:
        if not self.is_open:
            return
        self._session_factory = None
        if self._owns_engine and self._engine is not None:
            self._engine.dispose()
            self._engine = None
        logger.debug("Store closed")

    def __enter__(self) -> "LocalStore":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _sessions(self) -> SessionFactory:
        if self._session_factory is None:
            raise StoreClosedError("Store is not open")
        return self._session_factory

    def get_item(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or None when the slot is absent."""
        with self._sessions()() as session:
            slot = session.get(StorageSlot, key)
            return slot.value if slot else None

    def set_item(self, key: str, value: str) -> None:
        with self.lock, self._sessions()() as session:
            slot = session.get(StorageSlot, key)
            if slot:
                slot.value = value
                slot.updated_at = datetime.now(timezone.utc)
            else:
                slot = StorageSlot(key=key, value=value)
            session.add(slot)

    def has_item(self, key: str) -> bool:
        with self._sessions()() as session:
            return session.get(StorageSlot, key) is not None

    def remove_item(self, key: str) -> None:
        with self.lock, self._sessions()() as session:
            slot = session.get(StorageSlot, key)
            if slot:
                session.delete(slot)

    def keys(self) -> list[str]:
        with self._sessions()() as session:
            return list(session.exec(select(StorageSlot.key).order_by(StorageSlot.key)).all())

    def clear(self) -> None:
        with self.lock, self._sessions()() as session:
            for slot in session.exec(select(StorageSlot)).all():
                session.delete(slot)
        logger.info("Store cleared")


__all__ = ["LocalStore", "StorageError", "StoreClosedError"]
