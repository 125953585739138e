"""Tests for the local key-value store."""

from __future__ import annotations

from datetime import timezone

import pytest

from wealthdesk.infra.storage import LocalStore, StoreClosedError
from wealthdesk.models import StorageSlot


def test_absent_slot_reads_as_none(store):
    assert store.get_item("clients") is None
    assert store.has_item("clients") is False


def test_set_get_and_overwrite(store):
    store.set_item("clients", "[]")
    assert store.get_item("clients") == "[]"

    store.set_item("clients", '[{"id": "1"}]')
    assert store.get_item("clients") == '[{"id": "1"}]'
    assert store.keys() == ["clients"]


def test_large_blob_round_trips(store):
    blob = "x" * 200_000
    store.set_item("notes", blob)
    assert store.get_item("notes") == blob


def test_remove_and_clear(store):
    store.set_item("a", "1")
    store.set_item("b", "2")

    store.remove_item("a")
    store.remove_item("missing")
    assert store.keys() == ["b"]

    store.clear()
    assert store.keys() == []


def test_data_survives_reopen(config):
    with LocalStore(config) as first:
        first.set_item("tasks", "[1, 2]")

    with LocalStore(config) as second:
        assert second.get_item("tasks") == "[1, 2]"


def test_closed_store_rejects_access(config):
    store = LocalStore(config)
    with pytest.raises(StoreClosedError):
        store.get_item("clients")

    store.open()
    store.close()
    assert store.is_open is False
    with pytest.raises(StoreClosedError):
        store.set_item("clients", "[]")


def test_open_and_close_are_idempotent(config):
    store = LocalStore(config)
    assert store.open() is store
    assert store.open() is store
    store.close()
    store.close()


def test_slot_timestamp_is_timezone_aware():
    slot = StorageSlot(key="clients", value="[]")
    assert slot.updated_at.tzinfo is timezone.utc


def test_insert_and_rewrite_stamp_slots(store):
    store.set_item("clients", "[]")
    store.set_item("clients", "[]")
    store.set_item("tasks", "[]")
    assert store.keys() == ["clients", "tasks"]
