"""Read merge source files into domain batches.

Each file yields exactly one result kind so callers can ``match`` on the
outcome instead of catching exceptions: an absent file is expected and only
logged at INFO, an unreadable or malformed file is logged and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from actioncatalog.domain.reconciliation import SourceBatch

from .schema import SourceDocument

if TYPE_CHECKING:
    from pathlib import Path

    from actioncatalog.config import MergeConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedSource:
    tag: str
    path: Path
    batch: SourceBatch


@dataclass(frozen=True, slots=True)
class MissingSource:
    tag: str
    path: Path


@dataclass(frozen=True, slots=True)
class UnreadableSource:
    tag: str
    path: Path
    reason: str


type SourceLoadResult = LoadedSource | MissingSource | UnreadableSource


def read_source(tag: str, path: Path) -> SourceLoadResult:
    if not path.is_file():
        log.info("Source %s not found at %s; skipping", tag, path)
        return MissingSource(tag=tag, path=path)

    try:
        document = SourceDocument.model_validate_json(path.read_bytes())
    except OSError as exc:
        return _unreadable(tag, path, f"could not read file: {exc}")
    except ValidationError as exc:
        return _unreadable(tag, path, f"invalid source document: {exc.error_count()} error(s)")

    batch = SourceBatch(tag=tag, records=document.raw_actions())
    log.info("Loaded %s actions from %s", len(batch.records), tag)
    return LoadedSource(tag=tag, path=path, batch=batch)


def load_sources(config: MergeConfig) -> list[SourceLoadResult]:
    """Read every configured source, in merge priority order."""

    return [read_source(tag, path) for tag, path in config.source_paths()]


def _unreadable(tag: str, path: Path, reason: str) -> UnreadableSource:
    log.warning("Skipping source %s (%s): %s", tag, path, reason)
    return UnreadableSource(tag=tag, path=path, reason=reason)
