"""Table and imperative mapping for the discovery run history."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)

from actioncatalog.domain.model import DiscoveryRun

if TYPE_CHECKING:
    from sqlalchemy import Dialect
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    """Store timestamps in UTC and always hand back aware datetimes.

    SQLite drops the offset on the way in, so naive values read back are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        return None if value is None else _aware(value)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        return None if value is None else _aware(value)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "pk": "pk_%(table_name)s",
    }
)
mapper_registry = orm.registry(metadata=metadata)

discovery_run_table = Table(
    "discovery_runs",
    metadata,
    Column("id", Uuid(), primary_key=True),
    Column("started_at", UTCDateTime(), nullable=False),
    Column("finished_at", UTCDateTime(), nullable=False),
    Column("success", Boolean, nullable=False),
    Column("actions_found", Integer, nullable=False, default=0),
    Column("new_actions", Integer, nullable=False, default=0),
    Column("updated_actions", Integer, nullable=False, default=0),
    Column("phase", String(64)),
    Column("message", Text),
    Index(None, "finished_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Map ``DiscoveryRun`` onto ``discovery_runs``; later calls are no-ops."""

    mapper_registry.map_imperatively(DiscoveryRun, discovery_run_table)
    log.debug("Mapped %s onto %s", DiscoveryRun.__name__, discovery_run_table.name)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
