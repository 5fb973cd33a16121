"""Ledger and run reports produced by the discovery scheduler."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

LEDGER_SCHEMA_VERSION: Final[str] = "1.0.0"
EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class Ledger:
    """Cross-run coordination state: when the last successful update finished."""

    last_update: datetime = EPOCH
    schema_version: str = LEDGER_SCHEMA_VERSION


@dataclass(frozen=True, slots=True)
class RunReport:
    timestamp: datetime
    duration_seconds: float
    actions_found: int
    new_actions: int
    updated_actions: int
    sources_touched: tuple[str, ...]
    phase_counts: Mapping[str, int] = field(default_factory=dict[str, int])
    success: bool = True


@dataclass(frozen=True, slots=True)
class ErrorReport:
    timestamp: datetime
    message: str
    phase: str


@dataclass(eq=False, kw_only=True)
class DiscoveryRun:
    """History entry for one update attempt, successful or not."""

    started_at: datetime
    finished_at: datetime
    success: bool
    actions_found: int = 0
    new_actions: int = 0
    updated_actions: int = 0
    phase: str | None = None
    message: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def from_report(cls, report: RunReport, *, started_at: datetime) -> DiscoveryRun:
        return cls(
            started_at=started_at,
            finished_at=report.timestamp,
            success=True,
            actions_found=report.actions_found,
            new_actions=report.new_actions,
            updated_actions=report.updated_actions,
        )

    @classmethod
    def from_error(cls, report: ErrorReport, *, started_at: datetime) -> DiscoveryRun:
        return cls(
            started_at=started_at,
            finished_at=report.timestamp,
            success=False,
            phase=report.phase,
            message=report.message,
        )
