"""Tests for application context wiring."""

from __future__ import annotations

import pytest

from wealthdesk.config import BaseConfig
from wealthdesk.context import create_app_context
from wealthdesk.infra.storage import StoreClosedError
from wealthdesk.models import ClientBase


def test_context_seeds_on_first_run(config):
    with create_app_context(config) as app:
        assert [c.name for c in app.client_repo.list_all()] == [
            "Alice Johnson",
            "Bob Smith",
            "Carol White",
        ]
        assert len(app.holding_repo.list_for_client("1")) == 2


def test_context_without_seeding(tmp_path, monkeypatch):
    monkeypatch.setenv("WEALTHDESK_SEED_DEMO", "false")
    with create_app_context(BaseConfig(data_dir=tmp_path)) as app:
        assert app.client_repo.list_all() == []
        assert app.store.keys() == []


def test_context_applies_storage_prefix(tmp_path, monkeypatch):
    monkeypatch.setenv("WEALTHDESK_STORAGE_PREFIX", "crm_")
    monkeypatch.setenv("WEALTHDESK_SEED_DEMO", "0")
    with create_app_context(BaseConfig(data_dir=tmp_path)) as app:
        app.client_repo.create(ClientBase(name="Dana Lee"))
        assert app.store.keys() == ["crm_clients"]


def test_data_survives_reopen(config):
    with create_app_context(config) as app:
        created = app.client_repo.create(ClientBase(name="Dana Lee"))

    with create_app_context(config) as app:
        assert app.client_repo.get_by_id(created.id) == created
        # The seeded slot already exists, so seeding does not run again.
        assert len(app.client_repo.list_all()) == 4


def test_closed_context_rejects_access(config):
    app = create_app_context(config)
    app.close()
    with pytest.raises(StoreClosedError):
        app.client_repo.list_all()
