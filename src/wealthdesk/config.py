"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "WealthDesk"
    DB_FILENAME = "wealthdesk.db"
    FIRM_TAGLINE = "Wealth Management"

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DEV_MODE = _env_bool("WEALTHDESK_DEV_MODE", default=True)
        self.SEED_DEMO = _env_bool("WEALTHDESK_SEED_DEMO", default=True)
        self.DATABASE_URL = os.getenv("WEALTHDESK_DATABASE_URL", self._build_sqlite_url())
        self.STORAGE_PREFIX = os.getenv("WEALTHDESK_STORAGE_PREFIX", "").strip()
        self.FIRM_NAME = os.getenv("WEALTHDESK_FIRM_NAME", "DS Partners").strip()
        self.CURRENCY_SYMBOL = os.getenv("WEALTHDESK_CURRENCY_SYMBOL", "₹")
        self.DEFAULT_OWNER = os.getenv("WEALTHDESK_DEFAULT_OWNER", "admin").strip()
        if not self.FIRM_NAME:
            raise ValueError("WEALTHDESK_FIRM_NAME must not be blank.")
        if not self.DEFAULT_OWNER:
            raise ValueError("WEALTHDESK_DEFAULT_OWNER must not be blank.")

    def _resolve_data_dir(self, data_dir: Path | str | None = None) -> Path:
        """Return the directory holding the local store and logs."""

        data_root = data_dir or os.getenv("WEALTHDESK_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to the per-user data dir.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using the local SQLite store."""

    DEBUG = True
    TESTING = False
