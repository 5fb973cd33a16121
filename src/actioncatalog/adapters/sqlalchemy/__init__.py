"""SQLAlchemy adapter package for run history."""

from __future__ import annotations

from .mappings import create_all_tables, discovery_run_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyRunHistoryRepository
from .unit_of_work import (
    SqlAlchemyRunHistoryUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyRunHistoryRepository",
    "SqlAlchemyRunHistoryUnitOfWork",
    "StartupError",
    "create_all_tables",
    "discovery_run_table",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
