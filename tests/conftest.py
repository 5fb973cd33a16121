from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.pool import StaticPool

from actioncatalog.adapters.filesystem import JsonFileStore
from actioncatalog.adapters.sqlalchemy import (
    SqlAlchemyRunHistoryUnitOfWork,
    create_all_tables,
    shutdown,
    start_mappers,
    startup,
)
from actioncatalog.config import DiscoveryConfig, StorageConfig
from tests.helpers.discovery import StepClock

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def storage_config(tmp_path: Path) -> StorageConfig:
    return StorageConfig(data_dir=tmp_path / "data")


@pytest.fixture
def json_store(storage_config: StorageConfig) -> Iterator[JsonFileStore]:
    with JsonFileStore(storage_config) as store:
        yield store


@pytest.fixture
def discovery_config() -> DiscoveryConfig:
    return DiscoveryConfig(phase_timeout_seconds=5.0, sample_size=10)


@pytest.fixture
def clock() -> StepClock:
    return StepClock(start=datetime(2025, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def history_factory(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyRunHistoryUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyRunHistoryUnitOfWork:
        return SqlAlchemyRunHistoryUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
