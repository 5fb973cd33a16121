"""Canonical action record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import Confidence, ParameterType


@dataclass(slots=True, kw_only=True)
class Parameter:
    key: str
    type: ParameterType = ParameterType.STRING
    label: str | None = None
    description: str | None = None
    required: bool = False
    default_value: Any = None
    options: list[str] | None = None
    validation: dict[str, Any] | None = None


@dataclass(slots=True, kw_only=True)
class InputSpec:
    types: set[str] = field(default_factory=set[str])
    multiple: bool = False
    parameter_key: str | None = None


@dataclass(slots=True, kw_only=True)
class OutputSpec:
    types: set[str] = field(default_factory=set[str])
    multiple: bool = False


@dataclass(slots=True, kw_only=True)
class ActionRecord:
    """One catalog entry, keyed by its dotted ``identifier``.

    ``confidence`` only ever moves up the ladder and the provenance/auxiliary
    sets only ever grow; use the mutators below rather than assigning directly.
    """

    identifier: str
    name: str
    category: str
    description: str = ""
    action_class: str | None = None
    parameters: list[Parameter] = field(default_factory=list[Parameter])
    input: InputSpec = field(default_factory=InputSpec)
    output: OutputSpec = field(default_factory=OutputSpec)
    keywords: set[str] = field(default_factory=set[str])
    permissions: str = "none"
    minimum_version: str | None = None
    deprecated: bool = False
    confidence: Confidence = Confidence.LOW
    sources: set[str] = field(default_factory=set[str])
    usage_examples: set[str] = field(default_factory=set[str])
    related_actions: set[str] = field(default_factory=set[str])
    alternatives: set[str] = field(default_factory=set[str])

    def raise_confidence(self, level: Confidence) -> bool:
        """Move confidence up to ``level``; lower levels are ignored."""

        if level.rank > self.confidence.rank:
            self.confidence = level
            return True
        return False

    def add_source(self, source: str) -> None:
        self.sources.add(source)

    def parameter_keys(self) -> list[str]:
        return [parameter.key for parameter in self.parameters]
