"""Fold newly observed identifiers into the persisted catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from actioncatalog.domain.model import CanonicalDatabase, CatalogMetadata, Confidence
from actioncatalog.domain.reconciliation import infer_record

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

DISCOVERY_SOURCE: Final[str] = "discovery"

_NEXT_STEP: Final[dict[Confidence, Confidence]] = {
    Confidence.LOW: Confidence.MEDIUM,
    Confidence.MEDIUM: Confidence.HIGH,
}

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IntegrationResult:
    new_actions: int
    updated_actions: int


def upgrade_one_step(confidence: Confidence) -> Confidence:
    """Next rung up the ladder, stopping at ``high``; never reaches ``authoritative``."""

    return _NEXT_STEP.get(confidence, confidence)


def empty_database(*, generated_at: datetime) -> CanonicalDatabase:
    return CanonicalDatabase(
        metadata=CatalogMetadata(generated_at=generated_at, total_actions=0, categories=())
    )


def integrate_identifiers(
    database: CanonicalDatabase,
    identifiers: Iterable[str],
    *,
    source: str = DISCOVERY_SOURCE,
) -> IntegrationResult:
    """Add unknown identifiers as low-confidence records and credit known ones.

    A known record is only upgraded the first time ``source`` is added to its
    provenance. Records created here already carry ``source``, so re-observing
    them later changes nothing.
    """

    added = 0
    updated = 0
    for identifier in dict.fromkeys(identifiers):
        record = database.actions.get(identifier)
        if record is None:
            database.actions[identifier] = infer_record(identifier, source=source)
            added += 1
            continue
        if source in record.sources:
            continue
        record.add_source(source)
        record.raise_confidence(upgrade_one_step(record.confidence))
        updated += 1

    log.info("Integrated %s new actions, updated %s existing actions", added, updated)
    return IntegrationResult(new_actions=added, updated_actions=updated)
