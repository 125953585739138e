"""Tests for first-run seeding."""

from __future__ import annotations

import json
from datetime import datetime

from wealthdesk.infra.repositories import LocalClientRepository, LocalHoldingRepository
from wealthdesk.models import AssetClass, ClientBase
from wealthdesk.services.seed import ensure_seed_data

SLOTS = ["clients", "folios", "holdings", "notes", "tasks"]


def test_seeds_every_absent_slot(store):
    summary = ensure_seed_data(store)

    assert summary.seeded
    assert sorted(summary.written) == SLOTS
    assert sorted(store.keys()) == SLOTS


def test_seed_contents(store):
    ensure_seed_data(store, now=lambda: datetime(2025, 1, 15, 10, 0))

    clients = LocalClientRepository(store).list_all()
    assert [c.name for c in clients] == ["Alice Johnson", "Bob Smith", "Carol White"]

    holdings = LocalHoldingRepository(store).list_all()
    reliance = holdings[0]
    assert reliance.asset_class == AssetClass.STOCKS
    assert reliance.units * reliance.average_cost == 240000
    assert [s.price for s in reliance.price_history] == [2400, 2800]
    assert reliance.price_history[-1].date.isoformat() == "2025-01-15"


def test_seeding_is_idempotent(store):
    ensure_seed_data(store)
    snapshot = {key: store.get_item(key) for key in store.keys()}

    second = ensure_seed_data(store)

    assert not second.seeded
    assert {key: store.get_item(key) for key in store.keys()} == snapshot


def test_seeding_never_overwrites_user_data(store):
    repo = LocalClientRepository(store)
    mine = repo.create(ClientBase(name="Dana Grey", company="Grey & Co", email="dana@grey.co"))

    summary = ensure_seed_data(store)

    assert "clients" not in summary.written
    assert repo.list_all() == [mine]


def test_empty_collection_counts_as_existing(store):
    store.set_item("tasks", json.dumps([]))
    ensure_seed_data(store)
    assert store.get_item("tasks") == "[]"


def test_prefixed_seed(store):
    summary = ensure_seed_data(store, prefix="mock_")
    assert "mock_clients" in summary.written
    assert not store.has_item("clients")
