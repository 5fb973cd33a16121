"""Confidence-precedence merge of one record into another.

Merging is order-dependent: once a record is authoritative, later
non-authoritative sources may only add provenance and auxiliary examples.
Callers must therefore feed sources in a fixed order, authoritative first.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from actioncatalog.domain.model import ActionRecord, Confidence

if TYPE_CHECKING:
    from actioncatalog.domain.model import Parameter


def merge_record(
    existing: ActionRecord,
    incoming: ActionRecord,
    *,
    source: str | None,
    authoritative_source: str,
) -> ActionRecord:
    """Fold ``incoming`` into ``existing`` in place and return ``existing``.

    A ``source`` of ``None`` merges content without recording a new provenance tag.
    """

    if source is not None:
        existing.add_source(source)
    existing.sources |= incoming.sources
    existing.usage_examples |= incoming.usage_examples
    existing.related_actions |= incoming.related_actions

    if existing.confidence is Confidence.AUTHORITATIVE and source != authoritative_source:
        return existing

    if not existing.description:
        existing.description = incoming.description
    existing.parameters = merge_parameters(existing.parameters, incoming.parameters)
    existing.alternatives |= incoming.alternatives
    existing.keywords |= incoming.keywords
    existing.raise_confidence(incoming.confidence)
    return existing


def merge_parameters(existing: list[Parameter], incoming: list[Parameter]) -> list[Parameter]:
    """Union by key; existing fields win unless empty, new keys are appended."""

    if not incoming:
        return existing

    merged: dict[str, Parameter] = {parameter.key: parameter for parameter in existing}
    for parameter in incoming:
        current = merged.get(parameter.key)
        if current is None:
            merged[parameter.key] = parameter
            continue
        merged[parameter.key] = replace(
            current,
            label=current.label or parameter.label,
            description=current.description or parameter.description,
            default_value=(
                current.default_value
                if current.default_value is not None
                else parameter.default_value
            ),
            options=current.options or parameter.options,
            validation=current.validation or parameter.validation,
        )
    return list(merged.values())
