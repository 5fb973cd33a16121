from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from actioncatalog.domain.model import ActionRecord, Confidence, Parameter

if TYPE_CHECKING:
    from pathlib import Path


def make_record(
    identifier: str = "is.workflow.actions.gettext",
    *,
    name: str | None = None,
    category: str = "text",
    confidence: Confidence = Confidence.LOW,
    sources: set[str] | None = None,
    parameters: list[str] | None = None,
    **fields: Any,
) -> ActionRecord:
    return ActionRecord(
        identifier=identifier,
        name=name or identifier.rsplit(".", 1)[-1].title(),
        category=category,
        confidence=confidence,
        sources=set(sources or ()),
        parameters=[Parameter(key=key) for key in parameters or ()],
        **fields,
    )


def write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
