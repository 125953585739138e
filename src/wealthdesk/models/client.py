"""Client records and their patch model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class ClientStatus(str, Enum):
    LEAD = "Lead"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    CHURNED = "Churned"


class ClientSegment(str, Enum):
    """Advisory segments used to bucket clients."""

    SALARIED_MILLENNIAL_TIER1 = "Salaried millennials in metro, Tier-1 cities"
    SALARIED_MILLENNIAL_TIER2 = "Salaried millennials in Tier-2+ cities"
    SALARIED_GEN_Z = "Salaried Gen Z"
    SALARIED_GEN_X = "Salaried Gen X in Tier-1, Tier-2+ cities"
    SELF_EMPLOYED = "Self-employed professionals"
    GEN_Z_STUDENT = "Gen Z student"
    BUSINESS_OWNER = "Business owner"


class ClientBase(SQLModel):
    """Fields supplied when a client is recorded."""

    name: str = Field(min_length=1, max_length=128)
    company: str = Field(default="", max_length=128)
    email: str = Field(default="", max_length=254)
    phone: str = Field(default="", max_length=32)
    address: str = Field(default="")
    tags: list[str] = Field(default_factory=list)
    status: ClientStatus = Field(default=ClientStatus.LEAD)
    segment: Optional[ClientSegment] = Field(default=None)
    owner: str = Field(default="admin", max_length=64)
    notes: str = Field(default="")
    demat_id: Optional[str] = Field(default=None, max_length=32)


class Client(ClientBase):
    """A stored client with its assigned id and timestamps."""

    id: str
    created_at: datetime
    last_contact: datetime


class ClientUpdate(SQLModel):
    """Partial update for a client; only explicitly set fields are merged."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    tags: Optional[list[str]] = None
    status: Optional[ClientStatus] = None
    segment: Optional[ClientSegment] = None
    owner: Optional[str] = None
    notes: Optional[str] = None
    demat_id: Optional[str] = None
    last_contact: Optional[datetime] = None
