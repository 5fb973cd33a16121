from __future__ import annotations

import threading
from datetime import timedelta
from typing import TYPE_CHECKING

from actioncatalog.domain.discovery import (
    DiscoveryEngine,
    DiscoveryScheduler,
    DiscoveryService,
    ScriptedTicks,
    UpdateReporter,
)
from actioncatalog.domain.model import EPOCH, Ledger, SchedulerState
from tests.helpers.discovery import FakeEnvironmentProbe, InMemoryStore

if TYPE_CHECKING:
    from actioncatalog.config import DiscoveryConfig
    from tests.helpers.discovery import StepClock


def _scheduler(
    store: InMemoryStore,
    config: DiscoveryConfig,
    clock: StepClock,
    *,
    probe: FakeEnvironmentProbe | None = None,
    states: list[SchedulerState] | None = None,
) -> DiscoveryScheduler:
    engine = DiscoveryEngine(
        probe=probe or FakeEnvironmentProbe(locations=["is.workflow.actions.openapp"]),
        store=store,
        config=config,
        clock=clock,
    )
    scheduler = DiscoveryScheduler(
        engine=engine,
        reporter=UpdateReporter(store=store),
        update_interval=config.update_interval,
        clock=clock,
        on_transition=states.append if states is not None else None,
    )
    scheduler.load()
    return scheduler


def test_due_update_runs_and_advances_ledger(
    discovery_config: DiscoveryConfig, clock: StepClock
) -> None:
    store = InMemoryStore()
    states: list[SchedulerState] = []
    scheduler = _scheduler(store, discovery_config, clock, states=states)

    outcome = scheduler.tick()

    assert outcome is not None
    assert outcome.ran
    assert outcome.succeeded
    assert outcome.report is not None
    assert store.ledger.last_update == outcome.report.timestamp
    assert scheduler.last_update == outcome.report.timestamp
    assert store.run_reports == [outcome.report]
    assert store.error_reports == []
    assert states == [
        SchedulerState.CHECKING,
        SchedulerState.UPDATING,
        SchedulerState.REPORTING,
        SchedulerState.IDLE,
    ]


def test_recent_update_is_skipped(discovery_config: DiscoveryConfig, clock: StepClock) -> None:
    store = InMemoryStore(ledger=Ledger(last_update=clock.start - timedelta(hours=1)))
    states: list[SchedulerState] = []
    scheduler = _scheduler(store, discovery_config, clock, states=states)

    outcome = scheduler.tick()

    assert outcome is not None
    assert not outcome.ran
    assert store.catalog is None
    assert states == [SchedulerState.CHECKING, SchedulerState.IDLE]


def test_forced_update_ignores_interval(
    discovery_config: DiscoveryConfig, clock: StepClock
) -> None:
    store = InMemoryStore(ledger=Ledger(last_update=clock.start - timedelta(minutes=5)))
    scheduler = _scheduler(store, discovery_config, clock)

    outcome = scheduler.tick(force=True)

    assert outcome is not None
    assert outcome.succeeded
    assert store.catalog is not None


def test_failed_update_keeps_ledger_and_retries(
    discovery_config: DiscoveryConfig, clock: StepClock
) -> None:
    store = InMemoryStore(fail_save_catalog=True)
    scheduler = _scheduler(store, discovery_config, clock)

    failed = scheduler.tick()

    assert failed is not None
    assert failed.ran
    assert failed.error is not None
    assert failed.error.phase == "integration"
    assert store.ledger.last_update == EPOCH
    assert store.run_reports == []
    assert store.error_reports == [failed.error]
    assert scheduler.state is SchedulerState.IDLE
    assert scheduler.is_due()

    store.fail_save_catalog = False
    retried = scheduler.tick()

    assert retried is not None
    assert retried.succeeded
    assert store.ledger.last_update > EPOCH


def test_reporting_failure_enters_error_then_idle(
    discovery_config: DiscoveryConfig, clock: StepClock
) -> None:
    store = InMemoryStore(fail_reports=True)
    states: list[SchedulerState] = []
    scheduler = _scheduler(store, discovery_config, clock, states=states)

    outcome = scheduler.tick()

    assert outcome is not None
    assert states[-2:] == [SchedulerState.ERROR, SchedulerState.IDLE]
    assert scheduler.last_update == EPOCH
    assert store.ledger.last_update == EPOCH


def test_concurrent_trigger_is_coalesced(
    discovery_config: DiscoveryConfig, clock: StepClock
) -> None:
    release = threading.Event()
    updating = threading.Event()
    probe = FakeEnvironmentProbe(locations=["is.workflow.actions.openapp"], block=release)
    store = InMemoryStore()

    def observe(state: SchedulerState) -> None:
        if state is SchedulerState.UPDATING:
            updating.set()

    engine = DiscoveryEngine(probe=probe, store=store, config=discovery_config, clock=clock)
    scheduler = DiscoveryScheduler(
        engine=engine,
        reporter=UpdateReporter(store=store),
        update_interval=discovery_config.update_interval,
        clock=clock,
        on_transition=observe,
    )
    results: list[object] = []
    worker = threading.Thread(target=lambda: results.append(scheduler.tick(force=True)))
    worker.start()
    try:
        assert updating.wait(5)
        assert scheduler.tick(force=True) is None
    finally:
        release.set()
        worker.join(5)

    assert len(results) == 1
    assert store.saved_catalogs == 1
    assert len(store.run_reports) == 1


def test_service_checks_on_every_tick(discovery_config: DiscoveryConfig, clock: StepClock) -> None:
    store = InMemoryStore()
    scheduler = _scheduler(store, discovery_config, clock)
    service = DiscoveryService(scheduler, ScriptedTicks(2))

    service.start()
    service.join(5)

    assert not service.running
    assert len(store.run_reports) == 1
    assert scheduler.state is SchedulerState.IDLE


def test_requested_update_is_forced(discovery_config: DiscoveryConfig, clock: StepClock) -> None:
    store = InMemoryStore(ledger=Ledger(last_update=clock.start))
    scheduler = _scheduler(store, discovery_config, clock)
    service = DiscoveryService(scheduler, ScriptedTicks(0))

    service.request_update()
    service.run_forever()

    assert len(store.run_reports) == 1
