"""Schedule-driven state machine around the discovery engine.

``idle -> checking -> (idle | updating -> reporting -> idle)``. A run that
fails is reported and leaves the ledger untouched, so the next tick retries
it. ``error`` is entered only when the outcome itself cannot be persisted; the
scheduler always returns to ``idle``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from actioncatalog.domain.clock import utcnow
from actioncatalog.domain.model import EPOCH, ErrorReport, SchedulerState

from .errors import UPDATE_PHASE

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime, timedelta

    from actioncatalog.domain.clock import Clock
    from actioncatalog.domain.model import RunReport

    from .engine import DiscoveryEngine
    from .reporting import UpdateReporter

log = logging.getLogger(__name__)


class TickSource(Protocol):
    """Paces the background loop.

    ``wait`` blocks until the next tick or until ``wake`` is set, and returns
    ``False`` once no further ticks will come.
    """

    def wait(self, wake: threading.Event) -> bool: ...


@dataclass(frozen=True, slots=True)
class IntervalTicks:
    interval: timedelta

    def wait(self, wake: threading.Event) -> bool:
        wake.wait(self.interval.total_seconds())
        return True


@dataclass(slots=True)
class ScriptedTicks:
    """Deliver a fixed number of ticks without blocking."""

    remaining: int

    def wait(self, wake: threading.Event) -> bool:
        _ = wake
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True


@dataclass(frozen=True, slots=True)
class UpdateOutcome:
    ran: bool
    report: RunReport | None = None
    error: ErrorReport | None = None

    @property
    def succeeded(self) -> bool:
        return self.report is not None


class DiscoveryScheduler:
    """Decide when to update and serialise update attempts.

    At most one attempt runs at a time; a caller that arrives while one is in
    flight is coalesced into a no-op unless it asks to wait.
    """

    def __init__(
        self,
        *,
        engine: DiscoveryEngine,
        reporter: UpdateReporter,
        update_interval: timedelta,
        clock: Clock = utcnow,
        on_transition: Callable[[SchedulerState], None] | None = None,
    ) -> None:
        self._engine = engine
        self._reporter = reporter
        self._update_interval = update_interval
        self._clock = clock
        self._on_transition = on_transition
        self._lock = threading.Lock()
        self._state = SchedulerState.IDLE
        self._last_update: datetime = EPOCH

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def last_update(self) -> datetime:
        return self._last_update

    @property
    def next_update(self) -> datetime:
        return self._last_update + self._update_interval

    def load(self) -> None:
        """Read the last successful update time from the ledger."""

        self._last_update = self._reporter.store.load_ledger().last_update
        log.info("Last update: %s", self._last_update.isoformat())

    def is_due(self, now: datetime | None = None) -> bool:
        current = now or self._clock()
        return current - self._last_update >= self._update_interval

    def tick(self, *, force: bool = False, wait: bool = False) -> UpdateOutcome | None:
        """Run one check/update cycle.

        Returns ``None`` when another cycle was in flight and this one was coalesced.
        """

        if not self._lock.acquire(blocking=wait):
            log.info("Discovery update already in progress; skipping this trigger")
            return None
        try:
            return self._cycle(force=force)
        finally:
            self._lock.release()

    def _cycle(self, *, force: bool) -> UpdateOutcome:
        self._enter(SchedulerState.CHECKING)
        started = self._clock()
        if not force and not self.is_due(started):
            log.debug("Catalog is up to date; next update due %s", self.next_update.isoformat())
            self._enter(SchedulerState.IDLE)
            return UpdateOutcome(ran=False)

        self._enter(SchedulerState.UPDATING)
        report: RunReport | None = None
        error: ErrorReport | None = None
        try:
            report = self._engine.run()
        except Exception as exc:
            log.exception("Discovery update failed")
            error = ErrorReport(
                timestamp=self._clock(),
                message=str(exc) or type(exc).__name__,
                phase=getattr(exc, "phase", UPDATE_PHASE),
            )

        self._enter(SchedulerState.REPORTING)
        try:
            if report is not None:
                ledger = self._reporter.report_success(report, started_at=started)
                self._last_update = ledger.last_update
            elif error is not None:
                self._reporter.report_failure(error, started_at=started)
        except Exception:
            log.exception("Could not persist discovery outcome")
            self._enter(SchedulerState.ERROR)

        self._enter(SchedulerState.IDLE)
        return UpdateOutcome(ran=True, report=report, error=error)

    def _enter(self, state: SchedulerState) -> None:
        self._state = state
        if self._on_transition is not None:
            self._on_transition(state)


class DiscoveryService:
    """Drive a scheduler from a tick source on a background thread."""

    def __init__(self, scheduler: DiscoveryScheduler, ticks: TickSource) -> None:
        self.scheduler = scheduler
        self._ticks = ticks
        self._wake = threading.Event()
        self._force = threading.Event()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("Discovery service already running")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run_forever, name="action-discovery", daemon=True
        )
        self._thread.start()

    def run_forever(self) -> None:
        """Check immediately, then once per tick until stopped or ticks run out."""

        self.scheduler.load()
        while not self._stop.is_set():
            self._wake.clear()
            forced = self._force.is_set()
            self._force.clear()
            self.scheduler.tick(force=forced)
            if self._stop.is_set() or not self._ticks.wait(self._wake):
                break
        log.info("Discovery service stopped")

    def request_update(self) -> None:
        """Interrupt the wait for the next tick and force an update.

        An update already in flight is not interrupted.
        """

        self._force.set()
        self._wake.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        self._wake.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
