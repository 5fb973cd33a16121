"""Port for the persisted catalog, ledger and run reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from actioncatalog.domain.model import CanonicalDatabase, ErrorReport, Ledger, RunReport


class StoreClosedError(RuntimeError):
    """Raised when a store is used outside its ``open``/``close`` lifecycle."""


@runtime_checkable
class DiscoveryStore(Protocol):
    """Injected handle for everything the discovery engine persists.

    Implementations must replace the catalog atomically: readers see either the
    previous snapshot or the new one, never a partial write.
    """

    def open(self) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> DiscoveryStore: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None: ...

    def load_ledger(self) -> Ledger: ...

    def save_ledger(self, ledger: Ledger) -> None: ...

    def load_catalog(self) -> CanonicalDatabase | None: ...

    def save_catalog(self, database: CanonicalDatabase) -> None: ...

    def write_run_report(self, report: RunReport) -> None: ...

    def write_error_report(self, report: ErrorReport) -> None: ...
