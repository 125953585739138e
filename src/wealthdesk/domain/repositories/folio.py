"""Folio repository protocol."""

from __future__ import annotations

from ...models.folio import Folio, FolioUpdate
from .base import ClientOwnedEntityRepository

FolioRepository = ClientOwnedEntityRepository[Folio, FolioUpdate]
