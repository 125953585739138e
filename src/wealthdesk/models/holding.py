"""Portfolio holdings and their price history trail."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class AssetClass(str, Enum):
    STOCKS = "Stocks"
    MUTUAL_FUNDS = "Mutual Funds"
    FIXED_DEPOSITS = "Fixed Deposits"
    BONDS = "Bonds"
    PMS = "PMS"
    AIF = "AIF"


class PriceSample(SQLModel):
    """Price per unit (or NAV) observed on a given day."""

    date: dt.date
    price: float


class HoldingBase(SQLModel):
    """Fields supplied when a purchase is recorded."""

    client_id: str
    asset_class: AssetClass
    name: str = Field(min_length=1, max_length=128)
    purchase_date: dt.date
    units: float = Field(gt=0)
    average_cost: float = Field(gt=0)
    current_price: float = Field(gt=0)
    notes: str = Field(default="")


class Holding(HoldingBase):
    """A stored holding.

    ``price_history`` is append-only; the first sample is the purchase cost
    and ``current_price`` is authoritative for the latest price.
    """

    id: str
    price_history: list[PriceSample] = Field(default_factory=list)

    @property
    def invested_value(self) -> float:
        return self.units * self.average_cost

    @property
    def current_value(self) -> float:
        return self.units * self.current_price


class HoldingUpdate(SQLModel):
    """Partial update for a holding. The price history is not patchable."""

    client_id: Optional[str] = None
    asset_class: Optional[AssetClass] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    purchase_date: Optional[dt.date] = None
    units: Optional[float] = Field(default=None, gt=0)
    average_cost: Optional[float] = Field(default=None, gt=0)
    current_price: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None
