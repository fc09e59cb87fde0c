"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_date(name: str) -> Optional[date]:
    """Parse an optional ISO date from the environment."""

    value = os.getenv(name)
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtTracker"
    DB_FILENAME = "debttracker.db"
    LEGACY_CACHE_FILENAME = "legacy_cache.json"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTTRACKER_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("DEBTTRACKER_DATABASE_URL", self._build_sqlite_url())
        self.LEGACY_CACHE_PATH = Path(
            os.getenv("DEBTTRACKER_LEGACY_CACHE", str(self.DATA_DIR / self.LEGACY_CACHE_FILENAME))
        ).expanduser()
        # Due dates before this are rejected at the validation boundary.
        self.MIN_DUE_DATE = _env_date("DEBTTRACKER_MIN_DUE_DATE")
        self.CURRENCY_LABEL = os.getenv("DEBTTRACKER_CURRENCY_LABEL", "Rials")
        # Owner of all rows when no external identity provider is wired in.
        self.LOCAL_USER_ID = os.getenv("DEBTTRACKER_LOCAL_USER_ID", "local")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("DEBTTRACKER_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if not self.DATABASE_URL.startswith("sqlite"):
            return {"pool_pre_ping": True}
        # fetch_all reads from worker threads, so sessions must not be pinned to one thread.
        return {"connect_args": {"check_same_thread": False}}
