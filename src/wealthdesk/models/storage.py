"""Key-value slot table backing the local store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StorageSlot(SQLModel, table=True):
    """One string-keyed slot holding a serialized collection."""

    __tablename__: ClassVar[str] = "storage_slot"

    key: str = Field(primary_key=True, max_length=128)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
