"""Persist run outcomes: ledger, reports and run history."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from actioncatalog.domain.model import DiscoveryRun, Ledger

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from actioncatalog.domain.model import ErrorReport, RunReport
    from actioncatalog.domain.ports import DiscoveryStore, RunHistoryUnitOfWork

log = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateReporter:
    """Write the outcome of an update attempt.

    Only a successful run advances the ledger; a failed run leaves it untouched so
    the next scheduled check still sees the update as overdue.
    """

    store: DiscoveryStore
    history: Callable[[], RunHistoryUnitOfWork] | None = None

    def report_success(self, report: RunReport, *, started_at: datetime) -> Ledger:
        self.store.write_run_report(report)
        ledger = Ledger(last_update=report.timestamp)
        self.store.save_ledger(ledger)
        log.info(
            "Update report: %.1fs duration, found=%s, new=%s, updated=%s",
            report.duration_seconds,
            report.actions_found,
            report.new_actions,
            report.updated_actions,
        )
        self._record(DiscoveryRun.from_report(report, started_at=started_at))
        return ledger

    def report_failure(self, report: ErrorReport, *, started_at: datetime) -> None:
        self.store.write_error_report(report)
        log.error("Update failed in phase %s: %s", report.phase, report.message)
        self._record(DiscoveryRun.from_error(report, started_at=started_at))

    def _record(self, run: DiscoveryRun) -> None:
        if self.history is None:
            return
        try:
            with self.history() as uow:
                uow.repositories.runs.add(run)
                uow.commit()
        except Exception:
            log.exception("Could not append discovery run %s to history", run.id)
