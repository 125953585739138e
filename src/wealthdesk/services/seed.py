"""First-run example data for an empty store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..infra.storage import LocalStore
from ..logging_config import get_logger
from ..models import (
    AssetClass,
    Client,
    ClientSegment,
    ClientStatus,
    Folio,
    Holding,
    Note,
    PriceSample,
    Task,
    TaskPriority,
    TaskStatus,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeedSummary:
    """Slots written by a seeding pass; empty when everything existed."""

    written: tuple[str, ...]

    @property
    def seeded(self) -> bool:
        return bool(self.written)


def _clients(now: datetime) -> list[Client]:
    return [
        Client(
            id="1",
            name="Alice Johnson",
            company="TechNova Inc.",
            email="alice@technova.com",
            phone="+1 (555) 123-4567",
            address="123 Tech Park, San Francisco, CA",
            tags=["Enterprise", "High Value"],
            status=ClientStatus.ACTIVE,
            segment=ClientSegment.SALARIED_MILLENNIAL_TIER1,
            owner="admin",
            notes="Key decision maker for Q3 expansion.",
            last_contact=now - timedelta(days=2),
            created_at=now - timedelta(days=60),
            demat_id="1203040000012345",
        ),
        Client(
            id="2",
            name="Bob Smith",
            company="GreenLeaf Logistics",
            email="bsmith@greenleaf.net",
            phone="+1 (555) 987-6543",
            address="456 Eco Way, Austin, TX",
            tags=["Sustainability", "Lead"],
            status=ClientStatus.LEAD,
            segment=ClientSegment.BUSINESS_OWNER,
            owner="staff",
            notes="Interested in the basic plan.",
            last_contact=now - timedelta(days=5),
            created_at=now - timedelta(days=10),
        ),
        Client(
            id="3",
            name="Carol White",
            company="FinCore Systems",
            email="carol@fincore.io",
            phone="+1 (555) 456-7890",
            address="789 Wall St, New York, NY",
            tags=["Finance", "Risk"],
            status=ClientStatus.ACTIVE,
            segment=ClientSegment.SALARIED_GEN_X,
            owner="admin",
            notes="Renewal coming up in December.",
            last_contact=now - timedelta(days=1),
            created_at=now - timedelta(days=120),
            demat_id="IN30012345678900",
        ),
    ]


def _tasks(now: datetime) -> list[Task]:
    return [
        Task(
            id="1",
            client_id="1",
            title="Prepare Q3 Proposal",
            due_date=now + timedelta(days=3),
            priority=TaskPriority.HIGH,
            status=TaskStatus.PENDING,
            assigned_to="admin",
        ),
        Task(
            id="2",
            client_id="2",
            title="Follow up on intro call",
            due_date=now + timedelta(days=1),
            priority=TaskPriority.MEDIUM,
            status=TaskStatus.PENDING,
            assigned_to="staff",
        ),
    ]


def _notes(now: datetime) -> list[Note]:
    return [
        Note(
            id="1",
            client_id="1",
            content="Met with Alice, she is interested in the enterprise tier.",
            created_at=now - timedelta(days=2),
            created_by="admin",
        )
    ]


def _holding(
    holding_id: str,
    client_id: str,
    asset_class: AssetClass,
    name: str,
    purchase_date: date,
    units: float,
    average_cost: float,
    current_price: float,
    notes: str,
    today: date,
) -> Holding:
    return Holding(
        id=holding_id,
        client_id=client_id,
        asset_class=asset_class,
        name=name,
        purchase_date=purchase_date,
        units=units,
        average_cost=average_cost,
        current_price=current_price,
        notes=notes,
        price_history=[
            PriceSample(date=purchase_date, price=average_cost),
            PriceSample(date=today, price=current_price),
        ],
    )


def _holdings(today: date) -> list[Holding]:
    return [
        _holding("1", "1", AssetClass.STOCKS, "Reliance Industries", date(2023, 1, 15),
                 100, 2400, 2800, "Long term hold", today),
        _holding("2", "1", AssetClass.MUTUAL_FUNDS, "HDFC Top 100", date(2022, 6, 10),
                 500, 450, 580, "SIP", today),
        # Fixed deposits carry the accrued value as the current price.
        _holding("3", "3", AssetClass.FIXED_DEPOSITS, "SBI FD", date(2023, 5, 20),
                 1, 100000, 106000, "Emergency fund", today),
    ]


def _folios() -> list[Folio]:
    return [
        Folio(
            id="1",
            client_id="1",
            folio_number="12345/67",
            provider="HDFC Mutual Fund",
            notes="Primary MF",
        )
    ]


def ensure_seed_data(
    store: LocalStore,
    *,
    prefix: str = "",
    now: Optional[Callable[[], datetime]] = None,
) -> SeedSummary:
    """Write the example collections into every absent slot.

    Slots that already exist (even holding an empty collection) are left
    untouched, so running this on every startup never overwrites user data.
    """
    moment = (now or datetime.now)()
    collections = {
        "clients": _clients(moment),
        "tasks": _tasks(moment),
        "notes": _notes(moment),
        "holdings": _holdings(moment.date()),
        "folios": _folios(),
    }

    written: list[str] = []
    with store.lock:
        for slot, records in collections.items():
            key = f"{prefix}{slot}"
            if store.has_item(key):
                continue
            store.set_item(key, json.dumps([r.model_dump(mode="json") for r in records]))
            written.append(key)

    if written:
        logger.info("Seeded example data", extra={"slots": written})
    return SeedSummary(written=tuple(written))


__all__ = ["SeedSummary", "ensure_seed_data"]
