"""Application context owning the store and repositories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .config import BaseConfig
from .infra.repositories import (
    LocalClientRepository,
    LocalFolioRepository,
    LocalHoldingRepository,
    LocalNoteRepository,
    LocalTaskRepository,
)
from .infra.storage import LocalStore
from .logging_config import get_logger
from .services.seed import ensure_seed_data

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Centralized application context with the open store and repositories."""

    config: BaseConfig
    store: LocalStore

    client_repo: LocalClientRepository
    task_repo: LocalTaskRepository
    note_repo: LocalNoteRepository
    folio_repo: LocalFolioRepository
    holding_repo: LocalHoldingRepository

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "AppContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    store: Optional[LocalStore] = None,
    today: Callable[[], date] = date.today,
) -> AppContext:
    """Open the store, seed it on first run when enabled and wire repositories."""

    if config is None:
        config = BaseConfig()
    if store is None:
        store = LocalStore(config)
    store.open()

    prefix = config.STORAGE_PREFIX
    if config.SEED_DEMO:
        ensure_seed_data(store, prefix=prefix)

    logger.debug("Application context ready", extra={"prefix": prefix, "seed_demo": config.SEED_DEMO})
    return AppContext(
        config=config,
        store=store,
        client_repo=LocalClientRepository(store, prefix=prefix),
        task_repo=LocalTaskRepository(store, prefix=prefix),
        note_repo=LocalNoteRepository(store, prefix=prefix),
        folio_repo=LocalFolioRepository(store, prefix=prefix),
        holding_repo=LocalHoldingRepository(store, prefix=prefix, today=today),
    )
