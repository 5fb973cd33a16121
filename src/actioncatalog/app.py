"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from actioncatalog.adapters.external import HttpExternalResourceProbe
from actioncatalog.adapters.filesystem import JsonFileStore
from actioncatalog.adapters.shell import ShellEnvironmentProbe
from actioncatalog.adapters.sources import (
    LoadedSource,
    MissingSource,
    UnreadableSource,
    load_sources,
)
from actioncatalog.adapters.sqlalchemy import SqlAlchemyRunHistoryUnitOfWork, is_started, startup
from actioncatalog.config import (
    get_discovery_config,
    get_external_resource_config,
    get_merge_config,
    get_storage_config,
)
from actioncatalog.domain.clock import utcnow
from actioncatalog.domain.discovery import (
    DiscoveryEngine,
    DiscoveryScheduler,
    DiscoveryService,
    IntervalTicks,
    UpdateReporter,
    no_external_resources,
)
from actioncatalog.domain.reconciliation import Reconciler, build_database, render_digest

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from actioncatalog.config import DiscoveryConfig, MergeConfig, StorageConfig
    from actioncatalog.domain.clock import Clock
    from actioncatalog.domain.discovery import (
        EnvironmentProbe,
        ExternalResourceProbe,
        TickSource,
        UpdateOutcome,
    )
    from actioncatalog.domain.model import CanonicalDatabase, DiscoveryRun
    from actioncatalog.domain.ports import RunHistoryUnitOfWork
    from actioncatalog.domain.reconciliation import ValidationSummary

type HistoryFactory = Callable[[], RunHistoryUnitOfWork]

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildResult:
    database: CanonicalDatabase
    validation: ValidationSummary
    loaded: tuple[str, ...]
    missing: tuple[str, ...]
    unreadable: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DiscoveryStatus:
    last_update: datetime
    next_update: datetime
    update_due: bool
    total_actions: int
    recent_runs: tuple[DiscoveryRun, ...] = ()
    last_successful_run: DiscoveryRun | None = None


def build_catalog(
    *,
    merge_config: MergeConfig | None = None,
    storage_config: StorageConfig | None = None,
    clock: Clock = utcnow,
) -> BuildResult:
    """Merge the configured source files into the canonical catalog and digest."""

    storage = storage_config or get_storage_config()
    merge = merge_config or get_merge_config(default_dir=storage.resolve_data_dir())
    log.info(
        "Starting catalog build: sources_dir=%s, authoritative=%s",
        merge.sources_dir,
        merge.authoritative_source,
    )

    reconciler = Reconciler(authoritative_source=merge.authoritative_source)
    loaded: list[str] = []
    missing: list[str] = []
    unreadable: list[str] = []
    for result in load_sources(merge):
        match result:
            case LoadedSource(tag=tag, batch=batch):
                reconciler.add(batch)
                loaded.append(tag)
            case MissingSource(tag=tag):
                missing.append(tag)
            case UnreadableSource(tag=tag):
                unreadable.append(tag)

    database, validation = build_database(
        reconciler.records, sources=reconciler.summaries, generated_at=clock()
    )
    with JsonFileStore(storage) as store:
        store.save_catalog(database)
        store.write_digest(render_digest(database))

    log.info(
        "Finished catalog build: actions=%s, categories=%s, rejected=%s",
        len(database),
        len(database.metadata.categories),
        validation.rejected,
    )
    return BuildResult(
        database=database,
        validation=validation,
        loaded=tuple(loaded),
        missing=tuple(missing),
        unreadable=tuple(unreadable),
    )


def run_discovery_update(
    *,
    force: bool = False,
    external: bool = False,
    probe: EnvironmentProbe | None = None,
    external_probe: ExternalResourceProbe | None = None,
    storage_config: StorageConfig | None = None,
    discovery_config: DiscoveryConfig | None = None,
    history_factory: HistoryFactory | None = None,
    clock: Clock = utcnow,
) -> UpdateOutcome | None:
    """Run one scheduler cycle: update now if forced or overdue, otherwise do nothing."""

    storage = storage_config or get_storage_config()
    config = discovery_config or get_discovery_config()
    with JsonFileStore(storage) as store:
        scheduler = _build_scheduler(
            store=store,
            config=config,
            probe=probe or ShellEnvironmentProbe(config),
            external=external_probe or _external_probe(enabled=external),
            history=history_factory or _history_factory(storage),
            clock=clock,
        )
        scheduler.load()
        return scheduler.tick(force=force, wait=True)


def run_discovery_service(
    *,
    external: bool = False,
    probe: EnvironmentProbe | None = None,
    external_probe: ExternalResourceProbe | None = None,
    ticks: TickSource | None = None,
    storage_config: StorageConfig | None = None,
    discovery_config: DiscoveryConfig | None = None,
    history_factory: HistoryFactory | None = None,
    clock: Clock = utcnow,
) -> None:
    """Run the background discovery service until its tick source ends or it is interrupted."""

    storage = storage_config or get_storage_config()
    config = discovery_config or get_discovery_config()
    with JsonFileStore(storage) as store:
        scheduler = _build_scheduler(
            store=store,
            config=config,
            probe=probe or ShellEnvironmentProbe(config),
            external=external_probe or _external_probe(enabled=external),
            history=history_factory or _history_factory(storage),
            clock=clock,
        )
        service = DiscoveryService(scheduler, ticks or IntervalTicks(config.tick_interval))
        log.info(
            "Starting discovery service: tick=%s, update_interval=%s",
            config.tick_interval,
            config.update_interval,
        )
        service.start()
        try:
            service.join()
        finally:
            service.stop()


def discovery_status(
    *,
    storage_config: StorageConfig | None = None,
    discovery_config: DiscoveryConfig | None = None,
    history_factory: HistoryFactory | None = None,
    history_limit: int = 5,
    clock: Clock = utcnow,
) -> DiscoveryStatus:
    storage = storage_config or get_storage_config()
    config = discovery_config or get_discovery_config()
    with JsonFileStore(storage) as store:
        ledger = store.load_ledger()
        catalog = store.load_catalog()

    factory = history_factory or _history_factory(storage)
    with factory() as uow:
        recent = tuple(uow.repositories.runs.recent(limit=history_limit))
        last_successful = uow.repositories.runs.last_successful()

    next_update = ledger.last_update + config.update_interval
    return DiscoveryStatus(
        last_update=ledger.last_update,
        next_update=next_update,
        update_due=clock() >= next_update,
        total_actions=len(catalog) if catalog is not None else 0,
        recent_runs=recent,
        last_successful_run=last_successful,
    )


def _build_scheduler(
    *,
    store: JsonFileStore,
    config: DiscoveryConfig,
    probe: EnvironmentProbe,
    external: ExternalResourceProbe,
    history: HistoryFactory | None,
    clock: Clock,
) -> DiscoveryScheduler:
    engine = DiscoveryEngine(
        probe=probe, store=store, config=config, external=external, clock=clock
    )
    return DiscoveryScheduler(
        engine=engine,
        reporter=UpdateReporter(store=store, history=history),
        update_interval=config.update_interval,
        clock=clock,
    )


def _external_probe(*, enabled: bool) -> ExternalResourceProbe:
    if not enabled:
        return no_external_resources
    return HttpExternalResourceProbe(get_external_resource_config())


def _history_factory(storage: StorageConfig) -> HistoryFactory:
    if not is_started():
        startup(database_uri=storage.history_uri())
    return SqlAlchemyRunHistoryUnitOfWork
