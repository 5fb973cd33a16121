"""Turn a shape-resolved raw record into a canonical ``ActionRecord``.

The normalizer never fails: missing fields default to empty collections,
``False`` or ``None``; a missing name is synthesised from the identifier and a
missing category comes from the keyword classifier.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from actioncatalog.domain.model import (
    ActionRecord,
    Confidence,
    InputSpec,
    OutputSpec,
    Parameter,
    ParameterType,
)

from .categorize import categorize
from .heuristics import infer_input_types, infer_output_types, infer_permissions
from .raw import BareKeys, KeyedParameters, ParameterObjects, RawAction, RawParameter

if TYPE_CHECKING:
    from .raw import RawParameters

UNKNOWN_PARAMETER_KEY = "unknown"
DISCOVERY_DESCRIPTION = "Auto-discovered action: {identifier}"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def name_from_identifier(identifier: str) -> str:
    """``is.workflow.actions.getClipboard`` -> ``Get Clipboard``."""

    segment = identifier.rsplit(".", 1)[-1] or identifier
    words = _CAMEL_BOUNDARY.sub(" ", segment.replace("_", " "))
    words = " ".join(words.split())
    return words[:1].upper() + words[1:]


def normalize_record(
    identifier: str,
    raw: RawAction,
    *,
    source: str | None = None,
    authoritative: bool = False,
    trust_confidence: bool = False,
) -> ActionRecord:
    """Build a canonical record for ``identifier``.

    ``authoritative`` marks the designated primary source: its records default to
    authoritative confidence. Any other source claiming ``authoritative`` is capped at
    ``high`` unless ``trust_confidence`` is set, which is reserved for reloading an
    already-reconciled catalog.
    """

    sources = set(raw.sources)
    if source is not None:
        sources.add(source)

    return ActionRecord(
        identifier=identifier,
        name=raw.name or name_from_identifier(identifier),
        description=raw.description or "",
        category=raw.category or categorize(identifier),
        action_class=raw.action_class or None,
        parameters=normalize_parameters(raw.parameters),
        input=InputSpec(
            types=set(raw.input_types),
            multiple=raw.input_multiple,
            parameter_key=raw.input_parameter_key or None,
        ),
        output=OutputSpec(types=set(raw.output_types), multiple=raw.output_multiple),
        keywords=set(raw.keywords),
        permissions=raw.permissions or "none",
        minimum_version=raw.minimum_version or None,
        deprecated=raw.deprecated,
        confidence=_initial_confidence(
            raw.confidence, authoritative=authoritative, trust=trust_confidence
        ),
        sources=sources,
        usage_examples=set(raw.usage_examples),
        related_actions=set(raw.related_actions),
        alternatives=set(raw.alternatives),
    )


def infer_record(identifier: str, *, source: str) -> ActionRecord:
    """Build a low-confidence record from the identifier alone (no sample payload)."""

    return normalize_record(
        identifier,
        RawAction(
            description=DISCOVERY_DESCRIPTION.format(identifier=identifier),
            input_types=tuple(sorted(infer_input_types(identifier))),
            output_types=tuple(sorted(infer_output_types(identifier))),
            permissions=infer_permissions(identifier),
            confidence=Confidence.LOW,
        ),
        source=source,
    )


def _initial_confidence(
    claimed: Confidence | None, *, authoritative: bool, trust: bool
) -> Confidence:
    if claimed is None:
        return Confidence.AUTHORITATIVE if authoritative else Confidence.LOW
    if claimed is Confidence.AUTHORITATIVE and not (authoritative or trust):
        return Confidence.HIGH
    return claimed


def normalize_parameters(parameters: RawParameters) -> list[Parameter]:
    """Resolve any parameter shape into an ordered list unique by key."""

    match parameters:
        case BareKeys(keys=keys):
            resolved = [Parameter(key=key) for key in keys]
        case ParameterObjects(items=items):
            resolved = [normalize_parameter(item) for item in items]
        case KeyedParameters(entries=entries):
            resolved = [_keyed_parameter(key, value) for key, value in entries]

    unique: dict[str, Parameter] = {}
    for parameter in resolved:
        unique.setdefault(parameter.key, parameter)
    return list(unique.values())


def normalize_parameter(raw: RawParameter, *, key: str | None = None) -> Parameter:
    return Parameter(
        key=raw.key or key or UNKNOWN_PARAMETER_KEY,
        type=ParameterType.coerce(raw.type) if raw.type else ParameterType.STRING,
        label=raw.label or None,
        description=raw.description or None,
        required=raw.required,
        default_value=raw.default_value,
        options=list(raw.options) if raw.options else None,
        validation=dict(raw.validation) if raw.validation else None,
    )


def _keyed_parameter(key: str, value: RawParameter | object) -> Parameter:
    if isinstance(value, RawParameter):
        return normalize_parameter(value, key=key)
    return Parameter(key=key, type=ParameterType.of_value(value))
