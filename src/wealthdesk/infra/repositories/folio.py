"""Folio repository."""

from __future__ import annotations

from ...models.folio import Folio, FolioUpdate
from .base import ClientOwnedRepository


class LocalFolioRepository(ClientOwnedRepository[Folio, FolioUpdate]):
    slot = "folios"
    model = Folio


__all__ = ["LocalFolioRepository"]
