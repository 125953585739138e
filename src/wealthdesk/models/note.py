"""Free-text interaction notes."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class NoteBase(SQLModel):
    client_id: str
    content: str = Field(min_length=1)
    created_by: str = Field(default="admin", max_length=64)


class Note(NoteBase):
    id: str
    created_at: datetime


class NoteUpdate(SQLModel):
    content: Optional[str] = Field(default=None, min_length=1)
    created_by: Optional[str] = None
