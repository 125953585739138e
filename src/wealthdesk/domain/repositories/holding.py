"""Holding repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.holding import Holding, HoldingUpdate
from .base import ClientOwnedEntityRepository


class HoldingRepository(ClientOwnedEntityRepository[Holding, HoldingUpdate], Protocol):
    """Holdings additionally record a price sample whenever the price changes."""

    def update_price(self, holding_id: str, price: float) -> Optional[Holding]:
        """Set the current price; appends a price sample when it differs."""
        ...
