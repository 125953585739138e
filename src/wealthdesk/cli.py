"""Command-line front end for WealthDesk."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

import click
from pydantic import ValidationError

from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .models import (
    AssetClass,
    ClientBase,
    ClientSegment,
    ClientStatus,
    ClientUpdate,
    FolioBase,
    HoldingBase,
    TaskBase,
    TaskPriority,
)
from .services import analytics, clients as client_service, dashboard, seed, tasks as task_service
from .services.export_csv import export_clients_csv
from .services.import_csv import import_clients_csv
from .services.reports import (
    build_client_report,
    export_report_pdf,
    format_money,
    format_percent,
    render_report_text,
    report_filename,
)

STATUS_CHOICE = click.Choice([s.value for s in ClientStatus], case_sensitive=False)
SEGMENT_CHOICE = click.Choice([s.value for s in ClientSegment], case_sensitive=False)
ASSET_CHOICE = click.Choice([a.value for a in AssetClass], case_sensitive=False)
PRIORITY_CHOICE = click.Choice([p.value for p in TaskPriority], case_sensitive=False)
DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])

pass_app = click.make_pass_decorator(AppContext)


def _not_found(kind: str, record_id: str) -> NoReturn:
    click.echo(f"{kind} {record_id} not found.", err=True)
    raise click.exceptions.Exit(1)


def _invalid(exc: ValidationError) -> NoReturn:
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "value"
        click.echo(f"Invalid {field}: {error['msg']}", err=True)
    raise click.exceptions.Exit(1)


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding the local store (overrides WEALTHDESK_DATA_DIR).")
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path]) -> None:
    """Track clients, holdings, notes and tasks; print portfolio reports."""

    config = BaseConfig(data_dir=data_dir)
    setup_logging(config)
    app = create_app_context(config)
    ctx.obj = app
    ctx.call_on_close(app.close)


# -- clients ---------------------------------------------------------------------


@cli.group()
def clients() -> None:
    """Manage clients."""


@clients.command("list")
@click.option("--search", default="", help="Match name, company or email.")
@click.option("--status", type=STATUS_CHOICE, default=None)
@pass_app
def clients_list(app: AppContext, search: str, status: Optional[str]) -> None:
    found = client_service.search_clients(
        app.client_repo.list_all(), search, ClientStatus(status) if status else None
    )
    if not found:
        click.echo("No clients found.")
        return
    for client in found:
        click.echo(
            f"{client.id}  {client.name} ({client.company})  {client.status.value}  "
            f"last contact {client.last_contact:%b %d, %Y}"
        )


@clients.command("show")
@click.argument("client_id")
@pass_app
def clients_show(app: AppContext, client_id: str) -> None:
    client = app.client_repo.get_by_id(client_id)
    if client is None:
        _not_found("Client", client_id)
    click.echo(f"{client.name} - {client.company}")
    click.echo(f"Email: {client.email}  Phone: {client.phone}")
    click.echo(f"Status: {client.status.value}  Owner: {client.owner}")
    click.echo(f"Segment: {client.segment.value if client.segment else 'N/A'}")
    click.echo(f"Tags: {', '.join(client.tags) or 'none'}")
    click.echo(f"Last contact: {client.last_contact:%B %d, %Y}")
    notes = app.note_repo.list_for_client(client_id)
    click.echo(f"Notes ({len(notes)}):")
    for note in notes:
        click.echo(f"  [{note.created_at:%Y-%m-%d %H:%M}] {note.created_by}: {note.content}")


@clients.command("add")
@click.option("--name", required=True)
@click.option("--company", default="")
@click.option("--email", default="")
@click.option("--phone", default="")
@click.option("--address", default="")
@click.option("--status", type=STATUS_CHOICE, default=ClientStatus.LEAD.value)
@click.option("--segment", type=SEGMENT_CHOICE, default=None)
@click.option("--owner", default=None)
@click.option("--demat-id", default=None)
@click.option("--tag", "tags", multiple=True)
@pass_app
def clients_add(app: AppContext, **fields) -> None:
    fields["owner"] = fields["owner"] or app.config.DEFAULT_OWNER
    fields["tags"] = list(fields["tags"])
    try:
        client = app.client_repo.create(ClientBase(**fields))
    except ValidationError as exc:
        _invalid(exc)
    click.echo(f"Added client {client.id}")


@clients.command("update")
@click.argument("client_id")
@click.option("--name", default=None)
@click.option("--company", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--address", default=None)
@click.option("--status", type=STATUS_CHOICE, default=None)
@click.option("--segment", type=SEGMENT_CHOICE, default=None)
@click.option("--owner", default=None)
@click.option("--demat-id", default=None)
@pass_app
def clients_update(app: AppContext, client_id: str, **fields) -> None:
    try:
        updated = app.client_repo.update(
            client_id, ClientUpdate(**{k: v for k, v in fields.items() if v is not None})
        )
    except ValidationError as exc:
        _invalid(exc)
    if updated is None:
        _not_found("Client", client_id)
    click.echo(f"Updated client {client_id}")


@clients.command("archive")
@click.argument("client_id")
@pass_app
def clients_archive(app: AppContext, client_id: str) -> None:
    if client_service.archive_client(app.client_repo, client_id) is None:
        _not_found("Client", client_id)
    click.echo(f"Client {client_id} marked as inactive.")


@clients.command("delete")
@click.argument("client_id")
@pass_app
def clients_delete(app: AppContext, client_id: str) -> None:
    app.client_repo.delete(client_id)
    click.echo(f"Deleted client {client_id}")


@clients.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--search", default="")
@click.option("--status", type=STATUS_CHOICE, default=None)
@pass_app
def clients_export(app: AppContext, output: Path, search: str, status: Optional[str]) -> None:
    found = client_service.search_clients(
        app.client_repo.list_all(), search, ClientStatus(status) if status else None
    )
    path = export_clients_csv(clients=found, output_path=output)
    click.echo(f"Exported {len(found)} clients to {path}")


@clients.command("import")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_app
def clients_import(app: AppContext, csv_path: Path) -> None:
    created = import_clients_csv(
        csv_path=csv_path, repo=app.client_repo, default_owner=app.config.DEFAULT_OWNER
    )
    click.echo(f"Imported {len(created)} clients.")


# -- notes -----------------------------------------------------------------------


@cli.group()
def notes() -> None:
    """Client interaction notes."""


@notes.command("add")
@click.argument("client_id")
@click.argument("content")
@click.option("--author", default=None)
@pass_app
def notes_add(app: AppContext, client_id: str, content: str, author: Optional[str]) -> None:
    if app.client_repo.get_by_id(client_id) is None:
        _not_found("Client", client_id)
    note = client_service.log_note(
        notes=app.note_repo,
        clients=app.client_repo,
        client_id=client_id,
        content=content,
        author=author or app.config.DEFAULT_OWNER,
    )
    click.echo(f"Added note {note.id}")


# -- tasks -----------------------------------------------------------------------


@cli.group()
def tasks() -> None:
    """Follow-up tasks."""


@tasks.command("list")
@click.option("--client", "client_id", default=None)
@pass_app
def tasks_list(app: AppContext, client_id: Optional[str]) -> None:
    items = app.task_repo.list_for_client(client_id) if client_id else app.task_repo.list_all()
    for status, column in task_service.group_tasks_by_status(items).items():
        click.echo(f"{status.value} ({len(column)})")
        for task in column:
            click.echo(f"  {task.id}  {task.title}  [{task.priority.value}]  due {task.due_date:%b %d}")


@tasks.command("add")
@click.argument("client_id")
@click.argument("title")
@click.option("--due", type=DATE_TYPE, required=True)
@click.option("--priority", type=PRIORITY_CHOICE, default=TaskPriority.MEDIUM.value)
@click.option("--assignee", default=None)
@pass_app
def tasks_add(app: AppContext, client_id: str, title: str, due, priority: str, assignee: Optional[str]) -> None:
    try:
        task = app.task_repo.create(
            TaskBase(
                client_id=client_id,
                title=title,
                due_date=due,
                priority=TaskPriority(priority),
                assigned_to=assignee or app.config.DEFAULT_OWNER,
            )
        )
    except ValidationError as exc:
        _invalid(exc)
    click.echo(f"Added task {task.id}")


@tasks.command("advance")
@click.argument("task_id")
@pass_app
def tasks_advance(app: AppContext, task_id: str) -> None:
    task = task_service.advance_task(app.task_repo, task_id)
    if task is None:
        _not_found("Task", task_id)
    click.echo(f"Task {task_id} is now {task.status.value}")


@tasks.command("delete")
@click.argument("task_id")
@pass_app
def tasks_delete(app: AppContext, task_id: str) -> None:
    app.task_repo.delete(task_id)
    click.echo(f"Deleted task {task_id}")


# -- folios ----------------------------------------------------------------------


@cli.group()
def folios() -> None:
    """Fund folio registrations."""


@folios.command("add")
@click.argument("client_id")
@click.argument("folio_number")
@click.argument("provider")
@click.option("--notes", default="")
@pass_app
def folios_add(app: AppContext, client_id: str, folio_number: str, provider: str, notes: str) -> None:
    try:
        folio = app.folio_repo.create(
            FolioBase(client_id=client_id, folio_number=folio_number, provider=provider, notes=notes)
        )
    except ValidationError as exc:
        _invalid(exc)
    click.echo(f"Added folio {folio.id}")


@folios.command("list")
@click.argument("client_id")
@pass_app
def folios_list(app: AppContext, client_id: str) -> None:
    for folio in app.folio_repo.list_for_client(client_id):
        click.echo(f"{folio.id}  {folio.provider}  {folio.folio_number}")


@folios.command("delete")
@click.argument("folio_id")
@pass_app
def folios_delete(app: AppContext, folio_id: str) -> None:
    app.folio_repo.delete(folio_id)
    click.echo(f"Deleted folio {folio_id}")


# -- holdings --------------------------------------------------------------------


@cli.group()
def holdings() -> None:
    """Portfolio holdings and price updates."""


@holdings.command("add")
@click.argument("client_id")
@click.option("--asset-class", type=ASSET_CHOICE, required=True)
@click.option("--name", required=True)
@click.option("--purchase-date", type=DATE_TYPE, required=True)
@click.option("--units", type=float, required=True)
@click.option("--average-cost", type=float, required=True)
@click.option("--current-price", type=float, default=None, help="Defaults to the average cost.")
@click.option("--notes", default="")
@pass_app
def holdings_add(app: AppContext, client_id: str, asset_class: str, name: str, purchase_date,
                 units: float, average_cost: float, current_price: Optional[float], notes: str) -> None:
    try:
        holding = app.holding_repo.create(
            HoldingBase(
                client_id=client_id,
                asset_class=AssetClass(asset_class),
                name=name,
                purchase_date=purchase_date.date(),
                units=units,
                average_cost=average_cost,
                current_price=current_price if current_price is not None else average_cost,
                notes=notes,
            )
        )
    except ValidationError as exc:
        _invalid(exc)
    click.echo(f"Added holding {holding.id}")


@holdings.command("list")
@click.argument("client_id")
@pass_app
def holdings_list(app: AppContext, client_id: str) -> None:
    items = app.holding_repo.list_for_client(client_id)
    symbol = app.config.CURRENCY_SYMBOL
    for holding in items:
        perf = analytics.holding_performance(holding, date.today())
        click.echo(
            f"{holding.id}  {holding.asset_class.value:<15} {holding.name:<24} "
            f"{format_money(perf.current, symbol):>16}  CAGR {format_percent(perf.cagr)}"
        )
    summary = analytics.get_portfolio_summary(items)
    click.echo(
        f"Total invested {format_money(summary.total_invested, symbol)}, "
        f"current {format_money(summary.total_current, symbol)} "
        f"across {summary.holdings_count} holdings"
    )


@holdings.command("price")
@click.argument("holding_id")
@click.argument("price", type=float)
@pass_app
def holdings_price(app: AppContext, holding_id: str, price: float) -> None:
    try:
        holding = app.holding_repo.update_price(holding_id, price)
    except ValidationError as exc:
        _invalid(exc)
    if holding is None:
        _not_found("Holding", holding_id)
    click.echo(f"Price of {holding.name} set to {format_money(price, app.config.CURRENCY_SYMBOL)}")


@holdings.command("history")
@click.argument("holding_id")
@pass_app
def holdings_history(app: AppContext, holding_id: str) -> None:
    holding = app.holding_repo.get_by_id(holding_id)
    if holding is None:
        _not_found("Holding", holding_id)
    for sample in holding.price_history:
        click.echo(f"{sample.date.isoformat()}  {format_money(sample.price, app.config.CURRENCY_SYMBOL)}")
    click.echo(f"Change since purchase: {format_percent(analytics.price_change(holding))}")


@holdings.command("delete")
@click.argument("holding_id")
@pass_app
def holdings_delete(app: AppContext, holding_id: str) -> None:
    app.holding_repo.delete(holding_id)
    click.echo(f"Deleted holding {holding_id}")


# -- reports and housekeeping ------------------------------------------------------


@cli.command("report")
@click.argument("client_id")
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the report to this PDF file instead of printing it.")
@click.option("--pdf-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Write the report PDF into this directory using the default file name.")
@pass_app
def report(app: AppContext, client_id: str, pdf_path: Optional[Path], pdf_dir: Optional[Path]) -> None:
    """Print a client's portfolio report or export it as PDF."""

    client = app.client_repo.get_by_id(client_id)
    if client is None:
        _not_found("Client", client_id)
    client_report = build_client_report(
        client=client,
        holdings=app.holding_repo.list_for_client(client_id),
        folios=app.folio_repo.list_for_client(client_id),
        tasks=app.task_repo.list_all(),
        firm_name=app.config.FIRM_NAME,
        firm_tagline=app.config.FIRM_TAGLINE,
        currency_symbol=app.config.CURRENCY_SYMBOL,
    )
    if pdf_dir is not None and pdf_path is None:
        pdf_path = pdf_dir / report_filename(client_report)
    if pdf_path is None:
        click.echo(render_report_text(client_report))
        return
    written = export_report_pdf(client_report, output_path=pdf_path)
    click.echo(f"Report written: {written}")


@cli.command("dashboard")
@pass_app
def show_dashboard(app: AppContext) -> None:
    """Summarize clients and open tasks."""

    stats = dashboard.build_dashboard(app.client_repo.list_all(), app.task_repo.list_all())
    click.echo(f"Total clients: {stats.total_clients}")
    click.echo(f"Active clients: {stats.active_clients}")
    click.echo(f"New leads: {stats.new_leads}")
    click.echo(f"Pending tasks: {stats.pending_tasks}")
    for status, count in stats.status_breakdown.items():
        click.echo(f"  {status.value}: {count}")
    click.echo("Upcoming tasks:")
    for task in stats.upcoming_tasks:
        click.echo(f"  {task.due_date:%b %d}  {task.title}")


@cli.command("seed")
@pass_app
def seed_command(app: AppContext) -> None:
    """Write example data into any empty collection."""

    summary = seed.ensure_seed_data(app.store, prefix=app.config.STORAGE_PREFIX)
    if summary.seeded:
        click.echo(f"Seeded: {', '.join(summary.written)}")
    else:
        click.echo("All collections already exist; nothing seeded.")


def main() -> None:  # pragma: no cover - console entry point
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
