"""Shape-resolved raw input records.

Source payloads arrive in loosely defined shapes. Adapters resolve the shape
once at the boundary into the tagged variants below; everything downstream
matches on the variant instead of inspecting raw JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from actioncatalog.domain.model import Confidence


@dataclass(frozen=True, slots=True, kw_only=True)
class RawParameter:
    key: str | None = None
    type: str | None = None
    label: str | None = None
    description: str | None = None
    required: bool = False
    default_value: Any = None
    options: tuple[str, ...] | None = None
    validation: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class BareKeys:
    """Parameters given as a list of key strings."""

    keys: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ParameterObjects:
    """Parameters given as a list of structured objects."""

    items: tuple[RawParameter, ...] = ()


@dataclass(frozen=True, slots=True)
class KeyedParameters:
    """Parameters given as a key -> definition map.

    Values are either a structured ``RawParameter`` or a bare sample value whose
    Python type determines the parameter type.
    """

    entries: tuple[tuple[str, RawParameter | object], ...] = ()


type RawParameters = BareKeys | ParameterObjects | KeyedParameters


@dataclass(frozen=True, slots=True, kw_only=True)
class RawAction:
    name: str | None = None
    description: str | None = None
    category: str | None = None
    action_class: str | None = None
    parameters: RawParameters = field(default_factory=BareKeys)
    input_types: tuple[str, ...] = ()
    input_multiple: bool = False
    input_parameter_key: str | None = None
    output_types: tuple[str, ...] = ()
    output_multiple: bool = False
    keywords: tuple[str, ...] = ()
    permissions: str | None = None
    minimum_version: str | None = None
    deprecated: bool = False
    confidence: Confidence | None = None
    sources: tuple[str, ...] = ()
    usage_examples: tuple[str, ...] = ()
    related_actions: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()
