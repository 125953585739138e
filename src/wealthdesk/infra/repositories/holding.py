"""Holding repository with the price history trail."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

from ...logging_config import get_logger
from ...models.holding import Holding, HoldingBase, HoldingUpdate, PriceSample
from ..storage import LocalStore
from .base import ClientOwnedRepository, merge_patch, new_id

logger = get_logger(__name__)


class LocalHoldingRepository(ClientOwnedRepository[Holding, HoldingUpdate]):
    """Holdings are appended in purchase-recording order.

    ``today`` supplies the date stamped on price samples.
    """

    slot = "holdings"
    model = Holding

    def __init__(
        self,
        store: LocalStore,
        *,
        prefix: str = "",
        today: Callable[[], date] = date.today,
    ):
        super().__init__(store, prefix=prefix)
        self.today = today

    def _build(self, payload: HoldingBase) -> Holding:  # type: ignore[override]
        data: dict[str, Any] = payload.model_dump()
        data["id"] = new_id()
        data["price_history"] = [
            PriceSample(date=payload.purchase_date, price=payload.average_cost),
            PriceSample(date=self.today(), price=payload.current_price),
        ]
        return Holding.model_validate(data)

    def _apply(self, current: Holding, patch: HoldingUpdate) -> Holding:
        merged = merge_patch(current, patch)
        new_price = patch.model_dump(exclude_unset=True).get("current_price")
        if new_price is not None and new_price != current.current_price:
            sample = PriceSample(date=self.today(), price=new_price)
            merged.price_history = [*current.price_history, sample]
            logger.debug(
                "Price sample recorded",
                extra={"holding_id": current.id, "price": new_price, "date": sample.date},
            )
        return merged

    def update_price(self, holding_id: str, price: float) -> Holding | None:
        return self.update(holding_id, HoldingUpdate(current_price=price))


__all__ = ["LocalHoldingRepository"]
