"""Tests for holding creation and the price history trail."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from tests.conftest import FIXED_TODAY
from wealthdesk.infra.repositories import LocalHoldingRepository
from wealthdesk.models import HoldingBase, HoldingUpdate, PriceSample


def test_create_seeds_two_history_samples(holding_repo, holding_payload):
    holding = holding_repo.create(holding_payload())

    assert holding.price_history == [
        PriceSample(date=date(2023, 1, 15), price=2400),
        PriceSample(date=FIXED_TODAY, price=2800),
    ]
    assert holding_repo.get_by_id(holding.id) == holding


def test_price_change_appends_exactly_one_sample(holding_repo, holding_payload):
    holding = holding_repo.create(holding_payload())

    updated = holding_repo.update(holding.id, HoldingUpdate(current_price=2950))

    assert updated.current_price == 2950
    assert len(updated.price_history) == 3
    assert updated.price_history[:2] == holding.price_history
    assert updated.price_history[-1] == PriceSample(date=FIXED_TODAY, price=2950)
    assert holding_repo.get_by_id(holding.id).price_history == updated.price_history


def test_same_price_appends_nothing(holding_repo, holding_payload):
    holding = holding_repo.create(holding_payload())

    updated = holding_repo.update(holding.id, HoldingUpdate(current_price=2800))

    assert updated.price_history == holding.price_history


def test_other_field_updates_leave_history_alone(holding_repo, holding_payload):
    holding = holding_repo.create(holding_payload())

    updated = holding_repo.update(holding.id, HoldingUpdate(notes="Trim on rally", units=80))

    assert updated.notes == "Trim on rally"
    assert updated.units == 80
    assert updated.current_price == 2800
    assert updated.price_history == holding.price_history


def test_same_day_updates_are_not_deduplicated(holding_repo, holding_payload):
    holding = holding_repo.create(holding_payload())
    holding_repo.update_price(holding.id, 2900)
    holding_repo.update_price(holding.id, 3000)
    latest = holding_repo.update_price(holding.id, 2900)

    assert [s.price for s in latest.price_history] == [2400, 2800, 2900, 3000, 2900]
    assert all(s.date == FIXED_TODAY for s in latest.price_history[1:])
    assert latest.current_price == 2900


def test_history_dates_follow_the_clock(store, holding_payload):
    days = iter([date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1)])
    repo = LocalHoldingRepository(store, today=lambda: next(days))

    holding = repo.create(holding_payload())
    repo.update_price(holding.id, 2500)
    latest = repo.update_price(holding.id, 2600)

    assert [s.date for s in latest.price_history] == [
        date(2023, 1, 15),
        date(2025, 1, 1),
        date(2025, 2, 1),
        date(2025, 3, 1),
    ]


def test_update_price_unknown_holding(holding_repo):
    assert holding_repo.update_price("missing", 10) is None


@pytest.mark.parametrize("field", ["units", "average_cost", "current_price"])
def test_non_positive_amounts_are_rejected(holding_payload, field):
    with pytest.raises(ValidationError):
        holding_payload(**{field: 0})
    with pytest.raises(ValidationError):
        HoldingUpdate(**{field: -1})


def test_fractional_units_are_kept(holding_repo, holding_payload):
    holding = holding_repo.create(holding_payload(units=12.345))
    assert holding_repo.get_by_id(holding.id).units == pytest.approx(12.345)


def test_list_for_client(holding_repo, holding_payload):
    mine = holding_repo.create(holding_payload(client_id="1"))
    holding_repo.create(holding_payload(client_id="2"))
    assert holding_repo.list_for_client("1") == [mine]


def test_payload_type_is_holding_base(holding_payload):
    assert isinstance(holding_payload(), HoldingBase)
