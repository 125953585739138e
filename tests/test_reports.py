"""Tests for client portfolio reports."""

from __future__ import annotations

import math
from datetime import date, datetime

import matplotlib.pyplot as plt
import pytest

from tests.conftest import assert_float_equal, make_holding
from wealthdesk.models import (
    AssetClass,
    Client,
    ClientSegment,
    ClientStatus,
    Folio,
    Task,
    TaskStatus,
)
from wealthdesk.services.reports import (
    PAGE_BOTTOM,
    build_client_report,
    build_report_pages,
    export_report_pdf,
    format_money,
    format_percent,
    render_report_text,
    report_filename,
)

AS_OF = date(2025, 1, 15)


@pytest.fixture
def client() -> Client:
    return Client(
        id="c1",
        name="Alice Johnson",
        company="TechNova Inc.",
        email="alice@technova.com",
        phone="+1 (555) 123-4567",
        status=ClientStatus.ACTIVE,
        segment=ClientSegment.SALARIED_MILLENNIAL_TIER1,
        demat_id="1203040000012345",
        created_at=datetime(2024, 1, 1),
        last_contact=datetime(2025, 1, 10),
    )


@pytest.fixture
def holdings():
    return [
        make_holding(),
        make_holding(
            holding_id="h2",
            asset_class=AssetClass.MUTUAL_FUNDS,
            name="HDFC Top 100",
            units=500,
            average_cost=450,
            current_price=580,
            purchase_date=date(2022, 6, 10),
        ),
    ]


def _task(task_id: str, client_id: str, status: TaskStatus) -> Task:
    return Task(
        id=task_id,
        client_id=client_id,
        title=f"Task {task_id}",
        due_date=datetime(2025, 2, 1),
        status=status,
    )


def test_format_money():
    assert format_money(1234) == "₹1,234.00"
    assert format_money(-5.5) == "-₹5.50"
    assert format_money(10, "$") == "$10.00"


def test_format_percent_hides_undefined_values():
    assert format_percent(12.345) == "12.35%"
    assert format_percent(math.nan) == "n/a"
    assert format_percent(math.inf) == "n/a"


def test_report_totals_and_weights(client, holdings):
    report = build_client_report(client=client, holdings=holdings, as_of=AS_OF)

    summary = report.performance.summary
    assert summary.total_invested == 465000
    assert summary.total_current == 570000
    assert report.performance.since == date(2022, 6, 10)

    weights = {row.asset_class: row.weight for row in report.allocation}
    assert_float_equal(weights[AssetClass.STOCKS], 49.12)
    assert_float_equal(weights[AssetClass.MUTUAL_FUNDS], 50.88)
    assert_float_equal(sum(weights.values()), 100.0)


def test_report_narrows_tasks_to_open_client_tasks(client, holdings):
    tasks = [
        _task("1", "c1", TaskStatus.PENDING),
        _task("2", "c1", TaskStatus.COMPLETED),
        _task("3", "c2", TaskStatus.PENDING),
        _task("4", "c1", TaskStatus.IN_PROGRESS),
    ]
    report = build_client_report(client=client, holdings=holdings, tasks=tasks, as_of=AS_OF)
    assert [t.id for t in report.pending_tasks] == ["1", "4"]


def test_report_filename(client):
    report = build_client_report(client=client, holdings=[], as_of=AS_OF)
    assert report_filename(report) == "DS_Partners_Report_Alice_Johnson.pdf"


def test_render_text_sections(client, holdings):
    folio = Folio(id="f1", client_id="c1", folio_number="12345/67", provider="HDFC Mutual Fund", notes="Primary MF")
    report = build_client_report(
        client=client,
        holdings=holdings,
        folios=[folio],
        tasks=[_task("1", "c1", TaskStatus.PENDING)],
        as_of=AS_OF,
    )

    text = render_report_text(report)

    for heading in (
        "CLIENT DETAILS",
        "PORTFOLIO PERFORMANCE",
        "ASSET ALLOCATION",
        "HOLDINGS DETAIL",
        "REGISTERED FOLIOS",
        "PENDING ACTIONS",
    ):
        assert heading in text
    assert "Generated on January 15, 2025" in text
    assert "Invested Value: ₹465,000.00" in text
    assert "Current Value: ₹570,000.00" in text
    assert "Demat ID: 1203040000012345" in text
    assert "HDFC Mutual Fund: 12345/67 (Primary MF)" in text
    assert "- Task 1 - Due Feb 01" in text
    assert text.endswith("DS Partners Wealth Management - Confidential Client Report")


def test_render_text_without_holdings(client):
    report = build_client_report(client=client, holdings=[], as_of=AS_OF)
    text = render_report_text(report)

    assert "No holdings recorded." in text
    assert "No folios registered." in text
    assert "PENDING ACTIONS" not in text
    assert "CAGR / XIRR: 0.00% / 0.00%" in text


def test_custom_firm_and_currency(client, holdings):
    report = build_client_report(
        client=client,
        holdings=holdings,
        as_of=AS_OF,
        firm_name="Acme Wealth",
        currency_symbol="$",
    )
    assert report_filename(report) == "Acme_Wealth_Report_Alice_Johnson.pdf"
    assert "Invested Value: $465,000.00" in render_report_text(report)


def test_export_pdf_writes_file(tmp_path, client, holdings):
    report = build_client_report(client=client, holdings=holdings, as_of=AS_OF)

    output = export_report_pdf(report, output_path=tmp_path / "reports" / report_filename(report))

    assert output.exists()
    assert output.read_bytes().startswith(b"%PDF")


def test_export_pdf_with_empty_portfolio(tmp_path, client):
    report = build_client_report(client=client, holdings=[], as_of=AS_OF)
    output = export_report_pdf(report, output_path=tmp_path / "empty.pdf")
    assert output.stat().st_size > 0


def test_export_pdf_uses_custom_renderer(tmp_path, client, holdings):
    calls = []

    class RecordingRenderer:
        def render(self, figures, *, output_path):
            calls.append((list(figures), output_path))

    report = build_client_report(client=client, holdings=holdings, as_of=AS_OF)
    export_report_pdf(report, output_path=tmp_path / "r.pdf", renderer=RecordingRenderer())

    # One call with every page: the report page, then the allocation chart.
    assert len(calls) == 1
    figures, output_path = calls[0]
    assert output_path == tmp_path / "r.pdf"
    assert len(figures) == 2
    assert len({id(figure) for figure in figures}) == 2
    assert not (tmp_path / "r.pdf").exists()


def _many_holdings(count: int):
    return [
        make_holding(holding_id=f"h{i}", name=f"Instrument {i}", units=10 + i)
        for i in range(count)
    ]


def _table_axes(figure):
    return [ax for ax in figure.axes if ax.tables]


def test_small_portfolio_fits_one_page(client, holdings):
    report = build_client_report(client=client, holdings=holdings, as_of=AS_OF)
    pages = build_report_pages(report)
    try:
        assert len(pages) == 1
        assert len(_table_axes(pages[0])) == 2
    finally:
        for page in pages:
            plt.close(page)


def test_long_holdings_table_continues_on_next_page(client):
    report = build_client_report(client=client, holdings=_many_holdings(60), as_of=AS_OF)
    pages = build_report_pages(report)
    try:
        assert len(pages) >= 2
        rows_drawn = 0
        for page in pages:
            for ax in _table_axes(page):
                assert ax.get_position().y0 >= PAGE_BOTTOM - 1e-9
        # Every holding row appears exactly once across the pages.
        holding_tables = [ax.tables[0] for page in pages for ax in _table_axes(page)][1:]
        for table in holding_tables:
            rows_drawn += max(row for row, _ in table.get_celld())
        assert rows_drawn == 60
        texts = [t.get_text() for page in pages[1:] for t in page.texts]
        assert "Holdings Detail (continued)" in texts
    finally:
        for page in pages:
            plt.close(page)


def test_long_report_pdf_has_every_page(tmp_path, client):
    calls = []

    class RecordingRenderer:
        def render(self, figures, *, output_path):
            calls.append(len(figures))

    report = build_client_report(client=client, holdings=_many_holdings(60), as_of=AS_OF)
    export_report_pdf(report, output_path=tmp_path / "long.pdf", renderer=RecordingRenderer())

    pages = build_report_pages(report)
    try:
        assert calls == [len(pages) + 1]
    finally:
        for page in pages:
            plt.close(page)
