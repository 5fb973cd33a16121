"""Assemble the sorted, validated canonical database."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from actioncatalog.domain.model import CanonicalDatabase, CatalogMetadata

from .validate import DEFAULT_POLICY, ValidationPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from actioncatalog.domain.model import ActionRecord, SourceSummary

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationSummary:
    valid: int
    rejected: int


def build_database(
    records: Mapping[str, ActionRecord],
    *,
    sources: Iterable[SourceSummary],
    generated_at: datetime,
    policy: ValidationPolicy = DEFAULT_POLICY,
) -> tuple[CanonicalDatabase, ValidationSummary]:
    """Filter, sort and summarise merged records.

    Rejected records are dropped from the output only; ``records`` is not modified.
    """

    admitted = {
        identifier: record
        for identifier, record in records.items()
        if policy.is_valid(identifier, record)
    }
    summary = ValidationSummary(valid=len(admitted), rejected=len(records) - len(admitted))
    log.info("Validation: valid=%s, rejected=%s", summary.valid, summary.rejected)

    actions = sort_actions(admitted)
    metadata = CatalogMetadata(
        generated_at=generated_at,
        total_actions=len(actions),
        categories=distinct_categories(actions.values()),
        sources=tuple(sources),
    )
    return CanonicalDatabase(metadata=metadata, actions=actions), summary


def refresh_database(database: CanonicalDatabase, *, generated_at: datetime) -> CanonicalDatabase:
    """Re-sort and recompute totals after records were added or updated in place."""

    actions = sort_actions(database.actions)
    metadata = replace(
        database.metadata,
        generated_at=generated_at,
        total_actions=len(actions),
        categories=distinct_categories(actions.values()),
    )
    return CanonicalDatabase(metadata=metadata, actions=actions)


def sort_actions(actions: Mapping[str, ActionRecord]) -> dict[str, ActionRecord]:
    return {identifier: actions[identifier] for identifier in sorted(actions)}


def distinct_categories(records: Iterable[ActionRecord]) -> tuple[str, ...]:
    return tuple(sorted({record.category for record in records if record.category}))
