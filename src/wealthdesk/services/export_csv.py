"""CSV export of the client list."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable

from ..logging_config import get_logger
from ..models.client import Client

logger = get_logger(__name__)

CLIENT_CSV_HEADERS = (
    "ID",
    "Name",
    "Company",
    "Email",
    "Phone",
    "Status",
    "Segment",
    "Demat ID",
    "Owner",
    "Last Contact",
)


def _serialize_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def client_to_row(client: Client) -> str:
    """One CSV line for ``client``.

    Only the segment is quoted (segment names contain commas); other fields
    are written verbatim, so commas or quotes inside them break the row.
    """
    fields = [
        client.id,
        client.name,
        client.company,
        client.email,
        client.phone,
        _serialize_value(client.status),
        f'"{_serialize_value(client.segment)}"',
        _serialize_value(client.demat_id),
        client.owner,
        _serialize_value(client.last_contact),
    ]
    return ",".join(fields)


def clients_to_csv(clients: Iterable[Client]) -> str:
    lines = [",".join(CLIENT_CSV_HEADERS)]
    lines.extend(client_to_row(client) for client in clients)
    return "\n".join(lines)


def export_clients_csv(*, clients: Iterable[Client], output_path: Path) -> Path:
    """Write clients to CSV at ``output_path`` and return the path written."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    content = clients_to_csv(clients)
    output_path.write_text(content, encoding="utf-8")
    logger.info(
        "Clients exported",
        extra={"path": str(output_path), "rows": content.count("\n")},
    )
    return output_path


__all__ = ["CLIENT_CSV_HEADERS", "client_to_row", "clients_to_csv", "export_clients_csv"]
