"""Unit-of-work port around the run-history repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from .persistence import RunHistoryRepository


@dataclass(slots=True)
class RunHistoryRepositories:
    runs: RunHistoryRepository


@runtime_checkable
class RunHistoryUnitOfWork(Protocol):
    """Transaction boundary for history writes.

    Nothing is persisted unless ``commit`` is called inside the ``with`` block.
    """

    @property
    def repositories(self) -> RunHistoryRepositories: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
