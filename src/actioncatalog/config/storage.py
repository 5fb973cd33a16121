"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "actioncatalog"
CATALOG_FILENAME: Final[str] = "actions-database.json"
DIGEST_FILENAME: Final[str] = "ai-actions-reference.md"
LEDGER_FILENAME: Final[str] = "last-update.json"
RUN_REPORT_FILENAME: Final[str] = "update-report.json"
ERROR_REPORT_FILENAME: Final[str] = "update-error.json"
HISTORY_DB_FILENAME: Final[str] = "actioncatalog.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    catalog_filename: str = CATALOG_FILENAME
    digest_filename: str = DIGEST_FILENAME
    ledger_filename: str = LEDGER_FILENAME
    run_report_filename: str = RUN_REPORT_FILENAME
    error_report_filename: str = ERROR_REPORT_FILENAME
    history_filename: str = HISTORY_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    @property
    def catalog_path(self) -> Path:
        return self.resolve_data_dir() / self.catalog_filename

    @property
    def digest_path(self) -> Path:
        return self.resolve_data_dir() / self.digest_filename

    @property
    def ledger_path(self) -> Path:
        return self.resolve_data_dir() / self.ledger_filename

    @property
    def run_report_path(self) -> Path:
        return self.resolve_data_dir() / self.run_report_filename

    @property
    def error_report_path(self) -> Path:
        return self.resolve_data_dir() / self.error_report_filename

    def history_uri(self) -> str:
        env_uri = os.getenv("DATABASE_URI")
        if env_uri:
            return env_uri
        return f"sqlite+pysqlite:///{self.ensure_data_dir() / self.history_filename}"


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("ACTIONCATALOG_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)
