"""Filesystem-backed discovery store."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from actioncatalog.domain.model import Ledger
from actioncatalog.domain.ports import StoreClosedError

from .documents import (
    decode_database,
    decode_ledger,
    dumps,
    encode_database,
    encode_error_report,
    encode_ledger,
    encode_run_report,
)

if TYPE_CHECKING:
    from types import TracebackType

    from actioncatalog.config import StorageConfig
    from actioncatalog.domain.model import CanonicalDatabase, ErrorReport, RunReport

log = logging.getLogger(__name__)


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` next to ``path`` and swap it into place.

    Readers see either the old file or the complete new one.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        handle.write(content)
        handle.flush()
        os.fsync(handle.fileno())
        tmp_path = Path(handle.name)
    try:
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


class JsonFileStore:
    """Catalog, ledger and reports as JSON files under one data directory."""

    def __init__(self, config: StorageConfig) -> None:
        self.config = config
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        data_dir = self.config.ensure_data_dir()
        self._open = True
        log.debug("Opened store at %s", data_dir)

    def close(self) -> None:
        self._open = False

    def __enter__(self) -> JsonFileStore:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None:
        self.close()
        return None

    def load_ledger(self) -> Ledger:
        self._require_open()
        path = self.config.ledger_path
        if not path.is_file():
            return Ledger()
        try:
            return decode_ledger(path.read_bytes())
        except (OSError, ValidationError) as exc:
            log.warning("Ignoring unreadable ledger %s: %s", path, exc)
            return Ledger()

    def save_ledger(self, ledger: Ledger) -> None:
        self._require_open()
        atomic_write_text(self.config.ledger_path, dumps(encode_ledger(ledger)))

    def load_catalog(self) -> CanonicalDatabase | None:
        self._require_open()
        path = self.config.catalog_path
        if not path.is_file():
            return None
        return decode_database(path.read_bytes())

    def save_catalog(self, database: CanonicalDatabase) -> None:
        self._require_open()
        atomic_write_text(self.config.catalog_path, dumps(encode_database(database)))
        log.info("Wrote %s actions to %s", len(database), self.config.catalog_path)

    def write_digest(self, digest: str) -> None:
        self._require_open()
        atomic_write_text(self.config.digest_path, digest)

    def write_run_report(self, report: RunReport) -> None:
        self._require_open()
        atomic_write_text(self.config.run_report_path, dumps(encode_run_report(report)))

    def write_error_report(self, report: ErrorReport) -> None:
        self._require_open()
        atomic_write_text(self.config.error_report_path, dumps(encode_error_report(report)))

    def _require_open(self) -> None:
        if not self._open:
            raise StoreClosedError("Store is not open; call open() or use it as a context manager")
