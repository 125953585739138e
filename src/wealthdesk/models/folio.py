"""Folio registrations a client holds with fund providers."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


class FolioBase(SQLModel):
    client_id: str
    folio_number: str = Field(min_length=1, max_length=64)
    provider: str = Field(min_length=1, max_length=128)
    notes: str = Field(default="")


class Folio(FolioBase):
    id: str


class FolioUpdate(SQLModel):
    client_id: Optional[str] = None
    folio_number: Optional[str] = Field(default=None, min_length=1, max_length=64)
    provider: Optional[str] = Field(default=None, min_length=1, max_length=128)
    notes: Optional[str] = None
