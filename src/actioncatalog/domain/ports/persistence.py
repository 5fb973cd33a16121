"""Port for the discovery run history."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from actioncatalog.domain.model import DiscoveryRun


@runtime_checkable
class RunHistoryRepository(Protocol):
    """Append-only log of discovery attempts, newest first when read."""

    def add(self, entity: DiscoveryRun) -> None: ...

    def recent(self, limit: int = 10) -> list[DiscoveryRun]: ...

    def last_successful(self) -> DiscoveryRun | None: ...
