"""Client portfolio reports: printable text and PDF export."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, Protocol

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from ..logging_config import get_logger
from ..models.client import Client
from ..models.folio import Folio
from ..models.holding import AssetClass, Holding
from ..models.task import Task
from .analytics import (
    HoldingPerformance,
    PortfolioPerformance,
    allocation_weights,
    holding_performance,
    portfolio_performance,
)
from .tasks import pending_tasks_for_client

logger = get_logger(__name__)

A4_PORTRAIT = (8.27, 11.69)


class ReportRenderer(Protocol):
    """Writes the ordered report pages to one output document."""

    def render(self, figures: list[Figure], *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


@dataclass(frozen=True, slots=True)
class AllocationRow:
    asset_class: AssetClass
    invested: float
    current: float
    weight: float


@dataclass(slots=True)
class ClientReport:
    """Everything a portfolio report shows, computed once."""

    client: Client
    generated_on: date
    performance: PortfolioPerformance
    allocation: list[AllocationRow]
    holdings: list[HoldingPerformance]
    folios: list[Folio] = field(default_factory=list)
    pending_tasks: list[Task] = field(default_factory=list)
    firm_name: str = "DS Partners"
    firm_tagline: str = "Wealth Management"
    currency_symbol: str = "₹"

    def money(self, value: float) -> str:
        return format_money(value, self.currency_symbol)


def format_money(value: float, symbol: str = "₹") -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percent(value: float, digits: int = 2) -> str:
    if math.isnan(value) or math.isinf(value):
        return "n/a"
    return f"{value:.{digits}f}%"


def build_client_report(
    *,
    client: Client,
    holdings: list[Holding],
    folios: Iterable[Folio] = (),
    tasks: Iterable[Task] = (),
    as_of: date | None = None,
    firm_name: str = "DS Partners",
    firm_tagline: str = "Wealth Management",
    currency_symbol: str = "₹",
) -> ClientReport:
    """Assemble the report data for one client.

    ``holdings`` and ``folios`` are expected to belong to the client already;
    ``tasks`` may be the full task list and is narrowed to the client's open
    tasks here.
    """
    as_of = as_of or date.today()
    performance = portfolio_performance(holdings, as_of)
    weights = allocation_weights(performance.summary)
    allocation = [
        AllocationRow(
            asset_class=asset_class,
            invested=totals.invested,
            current=totals.current,
            weight=weights[asset_class],
        )
        for asset_class, totals in performance.summary.by_asset_class.items()
    ]
    return ClientReport(
        client=client,
        generated_on=as_of,
        performance=performance,
        allocation=allocation,
        holdings=[holding_performance(h, as_of) for h in holdings],
        folios=list(folios),
        pending_tasks=pending_tasks_for_client(tasks, client.id),
        firm_name=firm_name,
        firm_tagline=firm_tagline,
        currency_symbol=currency_symbol,
    )


def report_filename(report: ClientReport) -> str:
    firm = re.sub(r"\s+", "_", report.firm_name.strip())
    name = re.sub(r"\s+", "_", report.client.name.strip())
    return f"{firm}_Report_{name}.pdf"


def _client_lines(report: ClientReport) -> list[str]:
    client = report.client
    return [
        client.name,
        client.email,
        client.phone,
        f"Segment: {client.segment.value if client.segment else 'N/A'}",
        f"Demat ID: {client.demat_id or 'N/A'}",
        f"Status: {client.status.value}",
        f"Folios: {len(report.folios)}",
    ]


def _performance_cells(report: ClientReport) -> list[tuple[str, str]]:
    perf = report.performance
    return [
        ("Invested Value", report.money(perf.summary.total_invested)),
        ("Current Value", report.money(perf.summary.total_current)),
        ("Abs. Return", format_percent(perf.absolute_return)),
        ("CAGR / XIRR", f"{format_percent(perf.cagr)} / {format_percent(perf.xirr)}"),
    ]


def _allocation_table(report: ClientReport) -> tuple[list[str], list[list[str]]]:
    headers = ["Asset Class", "Invested", "Current Value", "Weight"]
    rows = [
        [row.asset_class.value, report.money(row.invested), report.money(row.current), format_percent(row.weight, 1)]
        for row in report.allocation
    ]
    return headers, rows


def _holdings_table(report: ClientReport) -> tuple[list[str], list[list[str]]]:
    headers = ["Asset", "Instrument", "Purchased", "Units", "Avg Cost", "Current Price", "Value", "CAGR"]
    rows = []
    for perf in report.holdings:
        h = perf.holding
        rows.append(
            [
                h.asset_class.value,
                h.name,
                h.purchase_date.strftime("%b %d, %Y"),
                f"{h.units:g}",
                report.money(h.average_cost),
                report.money(h.current_price),
                report.money(perf.current),
                format_percent(perf.cagr),
            ]
        )
    return headers, rows


def _text_table(headers: list[str], rows: list[list[str]]) -> list[str]:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    out = [line, "-" * len(line)]
    out.extend("  ".join(cell.ljust(w) for cell, w in zip(row, widths)) for row in rows)
    return out


def render_report_text(report: ClientReport) -> str:
    """Render the report as a fixed-layout plain-text document for printing."""

    lines = [
        f"{report.firm_name} - {report.firm_tagline}",
        "Portfolio Report",
        f"Generated on {report.generated_on.strftime('%B %d, %Y')}",
        "",
        "CLIENT DETAILS",
        *_client_lines(report),
        "",
        "PORTFOLIO PERFORMANCE",
        *(f"{label}: {value}" for label, value in _performance_cells(report)),
        "",
        "ASSET ALLOCATION",
    ]
    if report.allocation:
        lines.extend(_text_table(*_allocation_table(report)))
    else:
        lines.append("No holdings recorded.")

    lines += ["", "HOLDINGS DETAIL"]
    if report.holdings:
        lines.extend(_text_table(*_holdings_table(report)))
    else:
        lines.append("No holdings recorded.")

    lines += ["", "REGISTERED FOLIOS"]
    if report.folios:
        for folio in report.folios:
            suffix = f" ({folio.notes})" if folio.notes else ""
            lines.append(f"{folio.provider}: {folio.folio_number}{suffix}")
    else:
        lines.append("No folios registered.")

    if report.pending_tasks:
        lines += ["", "PENDING ACTIONS"]
        lines.extend(
            f"- {task.title} - Due {task.due_date.strftime('%b %d')}" for task in report.pending_tasks
        )

    lines += ["", f"{report.firm_name} {report.firm_tagline} - Confidential Client Report"]
    return "\n".join(lines)


def build_allocation_chart(report: ClientReport) -> Figure:
    """Donut chart of current value per asset class."""

    labels = [row.asset_class.value for row in report.allocation]
    sizes = [row.current for row in report.allocation]
    total = report.performance.summary.total_current

    fig, ax = plt.subplots(figsize=(8, 6))
    if sizes and total > 0:
        cmap = plt.get_cmap("tab20c")
        colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]
        wedges, _, autotexts = ax.pie(
            sizes,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            colors=colors,
            pctdistance=0.78,
        )
        for autotext in autotexts:
            autotext.set_fontsize(9)
            autotext.set_fontweight("bold")
            autotext.set_color("white")

        ax.text(0, 0.08, "Current Value", ha="center", va="center", fontsize=11, color="#666")
        ax.text(0, -0.08, report.money(total), ha="center", va="center", fontsize=16,
                fontweight="bold", color="#1F2937")
        ax.legend(
            wedges,
            [f"{row.asset_class.value}: {format_percent(row.weight, 1)}" for row in report.allocation],
            title="Asset Classes",
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
        )
        ax.axis("equal")
        ax.set_title("Asset Allocation", fontsize=14, fontweight="bold", pad=16)
    else:
        ax.text(0.5, 0.5, "No holdings recorded", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    fig.tight_layout()
    return fig


PAGE_TOP = 0.91
PAGE_BOTTOM = 0.07
LINE_HEIGHT = 0.018
ROW_HEIGHT = 0.022
TABLE_TITLE_GAP = 0.012
SECTION_GAP = 0.04


class _PageLayout:
    """Top-down cursor over A4 report pages.

    Content is placed at ``y`` and moves the cursor down; anything that would
    run below ``PAGE_BOTTOM`` starts a new page. Tables are split across
    pages row by row.
    """

    def __init__(self, report: ClientReport):
        self.report = report
        self.pages: list[Figure] = []
        self.fig = self._new_page()
        self.y = PAGE_TOP

    def _new_page(self) -> Figure:
        fig = plt.figure(figsize=A4_PORTRAIT)
        footer = f"{self.report.firm_name} {self.report.firm_tagline} - Confidential Client Report"
        fig.text(0.5, 0.03, footer, fontsize=7, color="#999", ha="center")
        fig.text(0.94, 0.03, f"Page {len(self.pages) + 1}", fontsize=7, color="#999", ha="right")
        if self.pages:
            fig.text(0.06, 0.95, f"Portfolio Report - {self.report.client.name}", fontsize=11,
                     fontweight="bold", color="#666")
        self.pages.append(fig)
        return fig

    def break_page(self) -> None:
        self.fig = self._new_page()
        self.y = PAGE_TOP

    def ensure(self, height: float) -> None:
        if self.y - height < PAGE_BOTTOM:
            self.break_page()

    def lines(self, title: str, lines: list[str], *, color: str | None = None) -> None:
        self.ensure(LINE_HEIGHT * 2)
        self.fig.text(0.06, self.y, title, fontsize=12, fontweight="bold", color=color)
        self.y -= LINE_HEIGHT
        for text in lines:
            self.ensure(LINE_HEIGHT)
            self.fig.text(0.06, self.y, text, fontsize=9)
            self.y -= LINE_HEIGHT
        self.y -= SECTION_GAP / 2

    def _rows_that_fit(self) -> int:
        # One row is taken by the column headers.
        return int((self.y - TABLE_TITLE_GAP - PAGE_BOTTOM) / ROW_HEIGHT) - 1

    def table(self, title: str, headers: list[str], rows: list[list[str]]) -> None:
        remaining = list(rows)
        heading = title
        while remaining:
            if self._rows_that_fit() < 1:
                self.break_page()
            count = self._rows_that_fit()
            chunk, remaining = remaining[:count], remaining[count:]
            self._draw_table(heading, headers, chunk)
            heading = f"{title} (continued)"

    def _draw_table(self, title: str, headers: list[str], rows: list[list[str]]) -> None:
        self.fig.text(0.06, self.y, title, fontsize=12, fontweight="bold")
        height = ROW_HEIGHT * (len(rows) + 1)
        ax = self.fig.add_axes((0.06, self.y - TABLE_TITLE_GAP - height, 0.88, height))
        ax.axis("off")
        table = ax.table(cellText=rows, colLabels=headers, loc="center", bbox=(0, 0, 1, 1), cellLoc="left")
        table.auto_set_font_size(False)
        table.set_fontsize(7.5)
        for (row_idx, _), cell in table.get_celld().items():
            if row_idx == 0:
                cell.set_text_props(fontweight="bold")
                cell.set_facecolor("#F3F4F6")
        self.y -= TABLE_TITLE_GAP + height + SECTION_GAP


def build_report_pages(report: ClientReport) -> list[Figure]:
    """Lay the report out on as many A4 pages as its tables need."""

    layout = _PageLayout(report)
    fig = layout.fig
    fig.text(0.06, 0.95, "Portfolio Report", fontsize=20, fontweight="bold")
    fig.text(0.06, 0.928, f"Generated on {report.generated_on.strftime('%B %d, %Y')}", fontsize=9, color="#666")
    fig.text(0.94, 0.95, report.firm_name, fontsize=14, fontweight="bold", ha="right")
    fig.text(0.94, 0.928, report.firm_tagline, fontsize=9, color="#666", ha="right")

    layout.y = 0.89
    fig.text(0.06, layout.y, "CLIENT DETAILS", fontsize=9, fontweight="bold", color="#666")
    client_lines = _client_lines(report)
    for offset, text in enumerate(client_lines):
        fig.text(0.06, layout.y - LINE_HEIGHT * (offset + 1), text, fontsize=9 if offset else 11,
                 fontweight="bold" if offset == 0 else "normal")
    layout.y -= LINE_HEIGHT * (len(client_lines) + 1) + 0.02

    fig.text(0.06, layout.y, "Portfolio Performance", fontsize=12, fontweight="bold")
    for idx, (label, value) in enumerate(_performance_cells(report)):
        x = 0.06 + idx * 0.22
        fig.text(x, layout.y - 0.025, label.upper(), fontsize=7, color="#666")
        fig.text(x, layout.y - 0.045, value, fontsize=10, fontweight="bold")
    layout.y -= 0.09

    if report.allocation:
        layout.table("Asset Allocation", *_allocation_table(report))
    if report.holdings:
        layout.table("Holdings Detail", *_holdings_table(report))

    folio_lines = [f"{f.provider}  {f.folio_number}" for f in report.folios] or ["No folios registered."]
    layout.lines("Registered Folios", folio_lines)

    if report.pending_tasks:
        layout.lines(
            "Pending Actions",
            [f"- {task.title} - Due {task.due_date.strftime('%b %d')}" for task in report.pending_tasks],
            color="#EA580C",
        )
    return layout.pages


def export_report_pdf(
    report: ClientReport,
    *,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Write the report to a PDF file: the report pages, then the allocation chart."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    figures = build_report_pages(report)
    if report.allocation:
        figures.append(build_allocation_chart(report))
    try:
        if renderer is not None:
            renderer.render(figures, output_path=output_path)
        else:
            with PdfPages(output_path) as pdf:
                for figure in figures:
                    pdf.savefig(figure)
    finally:
        for figure in figures:
            plt.close(figure)
    logger.info(
        "Report exported",
        extra={"client_id": report.client.id, "path": str(output_path), "pages": len(figures)},
    )
    return output_path


__all__ = [
    "AllocationRow",
    "ClientReport",
    "ReportRenderer",
    "build_allocation_chart",
    "build_client_report",
    "build_report_pages",
    "export_report_pdf",
    "format_money",
    "format_percent",
    "render_report_text",
    "report_filename",
]
