"""Canonical database aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

    from .action import ActionRecord

CATALOG_SCHEMA_VERSION: Final[str] = "2.0.0"


@dataclass(frozen=True, slots=True)
class SourceSummary:
    """One merged input, in processing order (``priority_rank`` starts at 1)."""

    source_tag: str
    record_count: int
    priority_rank: int


@dataclass(frozen=True, slots=True)
class CatalogMetadata:
    generated_at: datetime
    total_actions: int
    categories: tuple[str, ...]
    sources: tuple[SourceSummary, ...] = ()
    version: str = CATALOG_SCHEMA_VERSION


@dataclass(slots=True)
class CanonicalDatabase:
    metadata: CatalogMetadata
    actions: dict[str, ActionRecord] = field(default_factory=dict[str, "ActionRecord"])

    def get(self, identifier: str) -> ActionRecord | None:
        return self.actions.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.actions

    def __len__(self) -> int:
        return len(self.actions)
