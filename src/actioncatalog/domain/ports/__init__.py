"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import RunHistoryRepository
from .store import DiscoveryStore, StoreClosedError
from .unit_of_work import RunHistoryRepositories, RunHistoryUnitOfWork

__all__ = [
    "DiscoveryStore",
    "RunHistoryRepositories",
    "RunHistoryRepository",
    "RunHistoryUnitOfWork",
    "StoreClosedError",
]
