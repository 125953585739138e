"""Pytest configuration and shared fixtures for WealthDesk tests.

Every test gets its own SQLite-backed store under ``tmp_path`` so nothing
touches the real data directory.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest

from wealthdesk.config import BaseConfig
from wealthdesk.infra.repositories import (
    LocalClientRepository,
    LocalFolioRepository,
    LocalHoldingRepository,
    LocalNoteRepository,
    LocalTaskRepository,
)
from wealthdesk.infra.storage import LocalStore
from wealthdesk.logging_config import LOGGER_NAMESPACE
from wealthdesk.models import AssetClass, ClientBase, Holding, HoldingBase

FIXED_TODAY = date(2025, 1, 15)

_ENV_VARS = (
    "WEALTHDESK_DATA_DIR",
    "WEALTHDESK_DATABASE_URL",
    "WEALTHDESK_DEV_MODE",
    "WEALTHDESK_SEED_DEMO",
    "WEALTHDESK_STORAGE_PREFIX",
    "WEALTHDESK_FIRM_NAME",
    "WEALTHDESK_CURRENCY_SYMBOL",
    "WEALTHDESK_DEFAULT_OWNER",
)


# =============================================================================
# Configuration and storage
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo whatever setup_logging configured so tests do not depend on order."""
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config(tmp_path) -> BaseConfig:
    return BaseConfig(data_dir=tmp_path / "data")


@pytest.fixture
def store(config):
    """An open store on a fresh SQLite file, closed after the test."""
    local_store = LocalStore(config).open()
    yield local_store
    local_store.close()


# =============================================================================
# Repositories
# =============================================================================


@pytest.fixture
def client_repo(store) -> LocalClientRepository:
    return LocalClientRepository(store)


@pytest.fixture
def task_repo(store) -> LocalTaskRepository:
    return LocalTaskRepository(store)


@pytest.fixture
def note_repo(store) -> LocalNoteRepository:
    return LocalNoteRepository(store)


@pytest.fixture
def folio_repo(store) -> LocalFolioRepository:
    return LocalFolioRepository(store)


@pytest.fixture
def holding_repo(store) -> LocalHoldingRepository:
    """Holding repository whose "today" is pinned to FIXED_TODAY."""
    return LocalHoldingRepository(store, today=lambda: FIXED_TODAY)


# =============================================================================
# Test data factories
# =============================================================================


@pytest.fixture
def client_payload():
    def _make(name: str = "Alice Johnson", **overrides) -> ClientBase:
        fields = {
            "name": name,
            "company": "TechNova Inc.",
            "email": "alice@technova.com",
            "phone": "+1 (555) 123-4567",
        }
        fields.update(overrides)
        return ClientBase(**fields)

    return _make


def make_holding(
    *,
    units: float = 100,
    average_cost: float = 2400,
    current_price: float = 2800,
    asset_class: AssetClass = AssetClass.STOCKS,
    purchase_date: date = date(2023, 1, 15),
    client_id: str = "c1",
    name: str = "Reliance Industries",
    holding_id: str = "h1",
) -> Holding:
    """Build an in-memory holding without touching storage."""
    return Holding(
        id=holding_id,
        client_id=client_id,
        asset_class=asset_class,
        name=name,
        purchase_date=purchase_date,
        units=units,
        average_cost=average_cost,
        current_price=current_price,
    )


@pytest.fixture
def holding_payload():
    def _make(**overrides) -> HoldingBase:
        fields = {
            "client_id": "c1",
            "asset_class": AssetClass.STOCKS,
            "name": "Reliance Industries",
            "purchase_date": date(2023, 1, 15),
            "units": 100,
            "average_cost": 2400,
            "current_price": 2800,
            "notes": "Long term hold",
        }
        fields.update(overrides)
        return HoldingBase(**fields)

    return _make


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance."""
    assert abs(actual - expected) < tolerance, (
        f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
    )
