"""Client repository protocol."""

from __future__ import annotations

from ...models.client import Client, ClientUpdate
from .base import EntityRepository

ClientRepository = EntityRepository[Client, ClientUpdate]
