"""CSV ingestion of client lists."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

import pandas as pd

from ..domain.repositories import ClientRepository
from ..logging_config import get_logger
from ..models.client import Client, ClientBase, ClientSegment, ClientStatus
from .export_csv import CLIENT_CSV_HEADERS

logger = get_logger(__name__)

IMPORTED_NOTE = "Imported from CSV"


@dataclass(slots=True)
class ClientColumns:
    """Maps client fields to CSV column names (the export layout by default)."""

    name: str = "Name"
    company: str = "Company"
    email: str = "Email"
    phone: str = "Phone"
    status: str = "Status"
    segment: str = "Segment"
    demat_id: str = "Demat ID"
    owner: str = "Owner"


def read_client_rows(*, csv_path: Path, encoding: str = "utf-8") -> list[dict[str, str]]:
    """Load the rows after the header line as positional dicts.

    The header line is skipped rather than trusted; columns are taken in the
    export order. Quoted fields may contain commas. Lines pandas cannot fit
    to the layout are skipped and short lines are padded with blanks.
    """
    try:
        frame = pd.read_csv(
            csv_path,
            encoding=encoding,
            header=None,
            skiprows=1,
            names=list(CLIENT_CSV_HEADERS),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError:
        return []
    frame = frame.fillna("")
    return [{column: str(row[column]) for column in frame.columns} for _, row in frame.iterrows()]


def _field(row: Mapping[str, str], column: str) -> str:
    value = row.get(column)
    return value.strip() if isinstance(value, str) else ""


def _parse_enum(enum_cls, raw: str):
    for member in enum_cls:
        if member.value.lower() == raw.lower():
            return member
    return None


def rows_to_clients(
    *,
    rows: Iterable[Mapping[str, str]],
    columns: Optional[ClientColumns] = None,
    default_owner: str = "admin",
) -> list[ClientBase]:
    """Convert rows into client payloads, skipping rows without name, company or email."""

    columns = columns or ClientColumns()
    payloads: list[ClientBase] = []
    for row in rows:
        name = _field(row, columns.name)
        company = _field(row, columns.company)
        email = _field(row, columns.email)
        if not (name and company and email):
            logger.debug("Skipping malformed client row", extra={"row": dict(row)})
            continue

        payloads.append(
            ClientBase(
                name=name,
                company=company,
                email=email,
                phone=_field(row, columns.phone),
                status=_parse_enum(ClientStatus, _field(row, columns.status)) or ClientStatus.LEAD,
                segment=_parse_enum(ClientSegment, _field(row, columns.segment)),
                demat_id=_field(row, columns.demat_id) or None,
                owner=_field(row, columns.owner) or default_owner,
                notes=IMPORTED_NOTE,
            )
        )
    return payloads


def import_clients_csv(
    *,
    csv_path: Path,
    repo: ClientRepository,
    default_owner: str = "admin",
) -> list[Client]:
    """Parse the file and store one new client per well-formed row."""

    rows = read_client_rows(csv_path=csv_path)
    payloads = rows_to_clients(rows=rows, default_owner=default_owner)
    created = [repo.create(payload) for payload in payloads]
    logger.info(
        "Clients imported",
        extra={"path": str(csv_path), "rows": len(rows), "created_count": len(created)},
    )
    return created


__all__ = [
    "ClientColumns",
    "IMPORTED_NOTE",
    "import_clients_csv",
    "read_client_rows",
    "rows_to_clients",
]
