"""Pydantic models describing action source files.

Source files disagree on field spellings and on the shape of ``parameters``.
The validators below resolve both once, so ``ActionPayload.to_raw_action``
hands the domain a ``RawAction`` whose parameters are already a tagged variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from actioncatalog.domain.model import Confidence
from actioncatalog.domain.reconciliation import (
    BareKeys,
    KeyedParameters,
    ParameterObjects,
    RawAction,
    RawParameter,
)

_LEGACY_PARAMETER_FIELDS: dict[str, str] = {
    "Key": "key",
    "Label": "label",
    "Description": "description",
    "DefaultValue": "defaultValue",
    "Items": "options",
}


def _text_or_none(value: object) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    return None


def _string_list(value: object) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list | tuple | set):
        return [item for item in cast(list[object], list(value)) if isinstance(item, str)]
    return []


def _truthy(value: object) -> bool:
    return bool(value)


class SourceBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ParameterPayload(SourceBaseModel):
    key: str | None = None
    type: str | None = None
    label: str | None = None
    description: str | None = None
    required: bool = False
    default_value: Any = Field(default=None, alias="defaultValue")
    options: list[str] | None = None
    validation: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_spellings(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        data: dict[str, object] = dict(cast(Mapping[str, object], value))
        for legacy, current in _LEGACY_PARAMETER_FIELDS.items():
            if data.get(current) in (None, "") and legacy in data:
                data[current] = data[legacy]
        return data

    _normalize_text = field_validator("key", "type", "label", "description", mode="before")(
        _text_or_none
    )
    _normalize_required = field_validator("required", mode="before")(_truthy)

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: object) -> list[str] | None:
        if not isinstance(value, list | tuple):
            return None
        return [str(item) for item in cast(list[object], list(value))]

    @field_validator("validation", mode="before")
    @classmethod
    def _mapping_or_none(cls, value: object) -> object:
        return value if isinstance(value, Mapping) else None

    def to_raw_parameter(self) -> RawParameter:
        return RawParameter(
            key=self.key,
            type=self.type,
            label=self.label,
            description=self.description,
            required=self.required,
            default_value=self.default_value,
            options=tuple(self.options) if self.options else None,
            validation=self.validation,
        )


def resolve_parameter_shape(value: object) -> BareKeys | ParameterObjects | KeyedParameters:
    """Classify a raw ``parameters`` value into one of the three known shapes."""

    if isinstance(value, Mapping):
        entries: list[tuple[str, RawParameter | object]] = []
        for key, item in cast(Mapping[object, object], value).items():
            if isinstance(item, Mapping):
                entries.append((str(key), ParameterPayload.model_validate(item).to_raw_parameter()))
            else:
                entries.append((str(key), item))
        return KeyedParameters(entries=tuple(entries))

    if not isinstance(value, list | tuple):
        return BareKeys()

    items = cast(list[object], list(value))
    if all(isinstance(item, str) for item in items):
        return BareKeys(keys=tuple(cast(list[str], items)))

    objects: list[RawParameter] = []
    for item in items:
        if isinstance(item, str):
            objects.append(RawParameter(key=item))
        elif isinstance(item, Mapping):
            objects.append(ParameterPayload.model_validate(item).to_raw_parameter())
    return ParameterObjects(items=tuple(objects))


class InputPayload(SourceBaseModel):
    types: list[str] = Field(default_factory=list[str])
    multiple: bool = False
    parameter_key: str | None = Field(default=None, alias="parameterKey")

    _normalize_types = field_validator("types", mode="before")(_string_list)
    _normalize_multiple = field_validator("multiple", mode="before")(_truthy)
    _normalize_key = field_validator("parameter_key", mode="before")(_text_or_none)


class OutputPayload(SourceBaseModel):
    types: list[str] = Field(default_factory=list[str])
    multiple: bool = False

    _normalize_types = field_validator("types", mode="before")(_string_list)
    _normalize_multiple = field_validator("multiple", mode="before")(_truthy)


class ActionPayload(SourceBaseModel):
    name: str | None = None
    description: str | None = None
    category: str | None = None
    action_class: str | None = Field(default=None, alias="actionClass")
    # always one of the RawParameters variants once validated
    parameters: Any = Field(default_factory=BareKeys)
    input: InputPayload = Field(default_factory=InputPayload)
    output: OutputPayload = Field(default_factory=OutputPayload)
    keywords: list[str] = Field(default_factory=list[str])
    permissions: str | None = None
    minimum_version: str | None = Field(default=None, alias="minimumVersion")
    deprecated: bool = False
    confidence: Confidence | None = None
    sources: list[str] = Field(default_factory=list[str])
    usage_examples: list[str] = Field(default_factory=list[str], alias="usageExamples")
    related_actions: list[str] = Field(default_factory=list[str], alias="relatedActions")
    alternatives: list[str] = Field(default_factory=list[str])

    @model_validator(mode="before")
    @classmethod
    def _normalize_layout(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return {}
        data: dict[str, object] = dict(cast(Mapping[str, object], value))
        if not isinstance(data.get("input"), Mapping):
            data["input"] = {"types": data.get("inputTypes")}
        if not isinstance(data.get("output"), Mapping):
            data["output"] = {"types": data.get("outputTypes")}
        if not data.get("minimumVersion") and data.get("iosVersion"):
            data["minimumVersion"] = data["iosVersion"]
        return data

    _normalize_text = field_validator(
        "name",
        "description",
        "category",
        "action_class",
        "permissions",
        "minimum_version",
        mode="before",
    )(_text_or_none)
    _normalize_lists = field_validator(
        "keywords",
        "sources",
        "usage_examples",
        "related_actions",
        "alternatives",
        mode="before",
    )(_string_list)
    _normalize_deprecated = field_validator("deprecated", mode="before")(_truthy)

    @field_validator("parameters", mode="before")
    @classmethod
    def _resolve_parameters(cls, value: object) -> object:
        return resolve_parameter_shape(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _parse_confidence(cls, value: object) -> Confidence | None:
        return Confidence.parse(value)

    def to_raw_action(self) -> RawAction:
        return RawAction(
            name=self.name,
            description=self.description,
            category=self.category,
            action_class=self.action_class,
            parameters=self.parameters,
            input_types=tuple(self.input.types),
            input_multiple=self.input.multiple,
            input_parameter_key=self.input.parameter_key,
            output_types=tuple(self.output.types),
            output_multiple=self.output.multiple,
            keywords=tuple(self.keywords),
            permissions=self.permissions,
            minimum_version=self.minimum_version,
            deprecated=self.deprecated,
            confidence=self.confidence,
            sources=tuple(self.sources),
            usage_examples=tuple(self.usage_examples),
            related_actions=tuple(self.related_actions),
            alternatives=tuple(self.alternatives),
        )


class SourceDocument(SourceBaseModel):
    """A source file: ``{"metadata": ..., "actions": {...}}`` or a bare identifier map."""

    metadata: dict[str, Any] | None = None
    actions: dict[str, ActionPayload] = Field(default_factory=dict[str, ActionPayload])

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_map(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        data = cast(Mapping[str, object], value)
        actions = data.get("actions")
        if isinstance(actions, Mapping):
            metadata = data.get("metadata")
            return {
                "metadata": metadata if isinstance(metadata, Mapping) else None,
                "actions": actions,
            }
        return {"actions": {key: item for key, item in data.items() if key != "metadata"}}

    def raw_actions(self) -> dict[str, RawAction]:
        return {identifier: payload.to_raw_action() for identifier, payload in self.actions.items()}
