from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from actioncatalog.domain.model import CanonicalDatabase, ErrorReport, Ledger, RunReport

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from types import TracebackType

    from actioncatalog.domain.discovery import PhaseDeadline


@dataclass(slots=True)
class StepClock:
    """Deterministic clock that advances by ``step`` on every read."""

    start: datetime
    step: timedelta = timedelta(seconds=1)
    _current: datetime | None = None

    def __call__(self) -> datetime:
        current = self.start if self._current is None else self._current + self.step
        self._current = current
        return current

    def advance(self, delta: timedelta) -> None:
        self.start = self.now + delta
        self._current = None

    @property
    def now(self) -> datetime:
        return self.start if self._current is None else self._current


@dataclass(slots=True)
class FakeEnvironmentProbe:
    installed: dict[str, str] = field(default_factory=dict[str, str])
    locations: list[str] = field(default_factory=list[str])
    fail_enumeration: bool = False
    broken_items: set[str] = field(default_factory=set[str])
    block: threading.Event | None = None
    inspected: list[str] = field(default_factory=list[str])

    def enumerate_installed_items(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]:
        if self.fail_enumeration:
            raise RuntimeError("shortcuts: command not found")
        return list(self.installed)

    def inspect_item(self, name: str, *, deadline: PhaseDeadline | None = None) -> str:
        self.inspected.append(name)
        if name in self.broken_items:
            raise RuntimeError(f"cannot view {name}")
        return self.installed[name]

    def scan_known_locations(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]:
        if self.block is not None:
            self.block.wait(5)
        return list(self.locations)


@dataclass(slots=True)
class InMemoryStore:
    """Discovery store keeping everything in memory."""

    catalog: CanonicalDatabase | None = None
    ledger: Ledger = field(default_factory=Ledger)
    run_reports: list[RunReport] = field(default_factory=list[RunReport])
    error_reports: list[ErrorReport] = field(default_factory=list[ErrorReport])
    fail_save_catalog: bool = False
    fail_reports: bool = False
    saved_catalogs: int = 0

    def open(self) -> None:
        return None

    def close(self) -> None:
        return None

    def __enter__(self) -> InMemoryStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None:
        return None

    def load_ledger(self) -> Ledger:
        return self.ledger

    def save_ledger(self, ledger: Ledger) -> None:
        self.ledger = ledger

    def load_catalog(self) -> CanonicalDatabase | None:
        return self.catalog

    def save_catalog(self, database: CanonicalDatabase) -> None:
        if self.fail_save_catalog:
            raise OSError("disk full")
        self.catalog = database
        self.saved_catalogs += 1

    def write_run_report(self, report: RunReport) -> None:
        if self.fail_reports:
            raise OSError("read-only file system")
        self.run_reports.append(report)

    def write_error_report(self, report: ErrorReport) -> None:
        if self.fail_reports:
            raise OSError("read-only file system")
        self.error_reports.append(report)
