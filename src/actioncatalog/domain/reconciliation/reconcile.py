"""Accumulate records from several sources in a fixed priority order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from actioncatalog.domain.model import ActionRecord, SourceSummary

from .merge import merge_record
from .normalize import normalize_record

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .raw import RawAction

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceBatch:
    """All raw records contributed by one source, keyed by identifier."""

    tag: str
    records: Mapping[str, RawAction]


@dataclass(slots=True)
class Reconciler:
    """Merge source batches into one record per identifier.

    Batches must be added in priority order; the first batch tagged with
    ``authoritative_source`` is the only path to authoritative confidence.

    A batch whose records all declare provenance already recorded here, such as
    a previously built catalog fed back in, is folded in without its own tag or
    summary, so reloading a catalog leaves the result unchanged.
    """

    authoritative_source: str
    records: dict[str, ActionRecord] = field(default_factory=dict[str, ActionRecord])
    summaries: list[SourceSummary] = field(default_factory=list[SourceSummary])

    def add(self, batch: SourceBatch) -> None:
        if self.already_recorded(batch):
            self._fold_in(batch)
            return

        is_authoritative = batch.tag == self.authoritative_source
        created = 0
        for identifier, raw in batch.records.items():
            incoming = normalize_record(
                identifier, raw, source=batch.tag, authoritative=is_authoritative
            )
            existing = self.records.get(identifier)
            if existing is None:
                self.records[identifier] = incoming
                created += 1
                continue
            merge_record(
                existing,
                incoming,
                source=batch.tag,
                authoritative_source=self.authoritative_source,
            )

        self.summaries.append(
            SourceSummary(
                source_tag=batch.tag,
                record_count=len(batch.records),
                priority_rank=len(self.summaries) + 1,
            )
        )
        log.debug(
            "Merged source %s: records=%s, new=%s", batch.tag, len(batch.records), created
        )

    def add_all(self, batches: Iterable[SourceBatch]) -> None:
        for batch in batches:
            self.add(batch)

    def already_recorded(self, batch: SourceBatch) -> bool:
        """True when every record is known and cites only sources merged into it."""

        if not batch.records:
            return False
        for identifier, raw in batch.records.items():
            existing = self.records.get(identifier)
            if existing is None or not raw.sources or not existing.sources.issuperset(raw.sources):
                return False
        return True

    def _fold_in(self, batch: SourceBatch) -> None:
        for identifier, raw in batch.records.items():
            merge_record(
                self.records[identifier],
                normalize_record(identifier, raw),
                source=None,
                authoritative_source=self.authoritative_source,
            )
        log.debug(
            "Folded in source %s: all %s records already recorded", batch.tag, len(batch.records)
        )
