"""Client repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ...models.client import Client, ClientUpdate
from .base import JSONCollectionRepository


class LocalClientRepository(JSONCollectionRepository[Client, ClientUpdate]):
    """Clients are kept newest first."""

    slot = "clients"
    model = Client
    prepend = True

    def _stamp(self) -> dict[str, Any]:
        now = datetime.now()
        return {"created_at": now, "last_contact": now}


__all__ = ["LocalClientRepository"]
