"""Portfolio analytics: growth rates and holding aggregation.

All functions here are pure. Degenerate inputs (non-positive base values or
durations) yield ``0.0`` instead of raising; callers render that as "no
measurable growth".
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..models.holding import AssetClass, Holding

DAYS_PER_YEAR = 365.25


def _annualized(ratio: float, years: float) -> float:
    # A negative ratio has no real fractional root.
    if ratio < 0:
        return math.nan
    try:
        return (ratio ** (1 / years) - 1) * 100
    except OverflowError:
        return math.inf


def calculate_cagr(initial_value: float, current_value: float, years: float) -> float:
    """Compound annual growth rate in percent.

    ``years`` is continuous (days / 365.25). Returns 0 when ``initial_value``
    or ``years`` is not positive, NaN when ``current_value`` is negative and
    infinity when the growth overflows a float.
    """
    if initial_value <= 0 or years <= 0:
        return 0.0
    return _annualized(current_value / initial_value, years)


def calculate_xirr(initial_value: float, current_value: float, days: float) -> float:
    """Annualized return for a single cash flow held ``days`` days.

    This is not a money-weighted XIRR over a cash-flow series: with one
    purchase and one valuation it reduces to CAGR over ``days / 365.25``
    years, which is what is computed.
    """
    if initial_value <= 0 or days <= 0:
        return 0.0
    return _annualized(current_value / initial_value, days / DAYS_PER_YEAR)


@dataclass(slots=True)
class AssetClassTotals:
    invested: float = 0.0
    current: float = 0.0


@dataclass(slots=True)
class PortfolioSummary:
    """Invested and current value totals for a set of holdings."""

    total_invested: float = 0.0
    total_current: float = 0.0
    by_asset_class: dict[AssetClass, AssetClassTotals] = field(default_factory=dict)
    holdings_count: int = 0

    @property
    def absolute_return(self) -> float:
        return absolute_return(self.total_invested, self.total_current)


def get_portfolio_summary(holdings: Iterable[Holding]) -> PortfolioSummary:
    """Aggregate holdings into totals and a per-asset-class breakdown.

    Asset classes appear in the order they are first seen. No rounding is
    applied.
    """
    summary = PortfolioSummary()
    for holding in holdings:
        invested = holding.units * holding.average_cost
        current = holding.units * holding.current_price

        summary.total_invested += invested
        summary.total_current += current
        summary.holdings_count += 1

        bucket = summary.by_asset_class.setdefault(holding.asset_class, AssetClassTotals())
        bucket.invested += invested
        bucket.current += current
    return summary


def days_between(start: date, end: date) -> int:
    return (end - start).days


def years_between(start: date, end: date) -> float:
    return days_between(start, end) / DAYS_PER_YEAR


def absolute_return(invested: float, current: float) -> float:
    """Simple (non-annualized) return in percent; 0 when nothing was invested."""
    if invested <= 0:
        return 0.0
    return (current - invested) / invested * 100


def allocation_weights(summary: PortfolioSummary) -> dict[AssetClass, float]:
    """Share of the current portfolio value per asset class, in percent."""
    total = summary.total_current
    return {
        asset_class: (totals.current / total * 100) if total > 0 else 0.0
        for asset_class, totals in summary.by_asset_class.items()
    }


@dataclass(frozen=True, slots=True)
class HoldingPerformance:
    holding: Holding
    invested: float
    current: float
    gain: float
    cagr: float


def holding_performance(holding: Holding, as_of: date) -> HoldingPerformance:
    """Value and annualized growth of one holding since its purchase date."""
    invested = holding.invested_value
    current = holding.current_value
    return HoldingPerformance(
        holding=holding,
        invested=invested,
        current=current,
        gain=current - invested,
        cagr=calculate_cagr(invested, current, years_between(holding.purchase_date, as_of)),
    )


@dataclass(frozen=True, slots=True)
class PortfolioPerformance:
    summary: PortfolioSummary
    since: Optional[date]
    absolute_return: float
    cagr: float
    xirr: float


def portfolio_performance(holdings: list[Holding], as_of: date) -> PortfolioPerformance:
    """Portfolio-level growth measured from the earliest purchase date.

    Both rates treat the whole invested amount as one cash flow at the
    earliest purchase, so they agree up to rounding.
    """
    summary = get_portfolio_summary(holdings)
    since = min((h.purchase_date for h in holdings), default=None)
    days = days_between(since, as_of) if since else 0
    return PortfolioPerformance(
        summary=summary,
        since=since,
        absolute_return=summary.absolute_return,
        cagr=calculate_cagr(summary.total_invested, summary.total_current, days / DAYS_PER_YEAR),
        xirr=calculate_xirr(summary.total_invested, summary.total_current, days),
    )


def price_change(holding: Holding) -> float:
    """Change of the latest price sample over the first one, in percent."""
    history = holding.price_history
    if len(history) < 2 or history[0].price <= 0:
        return 0.0
    return (history[-1].price - history[0].price) / history[0].price * 100


__all__ = [
    "AssetClassTotals",
    "DAYS_PER_YEAR",
    "HoldingPerformance",
    "PortfolioPerformance",
    "PortfolioSummary",
    "absolute_return",
    "allocation_weights",
    "calculate_cagr",
    "calculate_xirr",
    "days_between",
    "get_portfolio_summary",
    "holding_performance",
    "portfolio_performance",
    "price_change",
    "years_between",
]
