"""JSON documents written to the data directory.

Everything is serialized with camelCase keys, sets as sorted lists and actions in
identifier order, so two writes of the same catalog are byte-identical.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from actioncatalog.adapters.sources.schema import ActionPayload
from actioncatalog.domain.model import (
    CATALOG_SCHEMA_VERSION,
    EPOCH,
    LEDGER_SCHEMA_VERSION,
    CanonicalDatabase,
    CatalogMetadata,
    Ledger,
    SourceSummary,
)
from actioncatalog.domain.reconciliation import distinct_categories, normalize_record

if TYPE_CHECKING:
    from actioncatalog.domain.model import ActionRecord, ErrorReport, Parameter, RunReport


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _timestamp(value: datetime) -> str:
    return _as_utc(value).isoformat()


def dumps(document: object) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


# Encoding --------------------------------------------------------------------


def encode_parameter(parameter: Parameter) -> dict[str, Any]:
    return {
        "key": parameter.key,
        "type": parameter.type.value,
        "label": parameter.label,
        "description": parameter.description,
        "required": parameter.required,
        "defaultValue": parameter.default_value,
        "options": parameter.options,
        "validation": parameter.validation,
    }


def encode_record(record: ActionRecord) -> dict[str, Any]:
    return {
        "identifier": record.identifier,
        "name": record.name,
        "description": record.description,
        "category": record.category,
        "actionClass": record.action_class,
        "parameters": [encode_parameter(parameter) for parameter in record.parameters],
        "input": {
            "types": sorted(record.input.types),
            "multiple": record.input.multiple,
            "parameterKey": record.input.parameter_key,
        },
        "output": {
            "types": sorted(record.output.types),
            "multiple": record.output.multiple,
        },
        "keywords": sorted(record.keywords),
        "permissions": record.permissions,
        "minimumVersion": record.minimum_version,
        "deprecated": record.deprecated,
        "confidence": record.confidence.value,
        "sources": sorted(record.sources),
        "usageExamples": sorted(record.usage_examples),
        "relatedActions": sorted(record.related_actions),
        "alternatives": sorted(record.alternatives),
    }


def encode_database(database: CanonicalDatabase) -> dict[str, Any]:
    metadata = database.metadata
    return {
        "metadata": {
            "version": metadata.version,
            "generatedAt": _timestamp(metadata.generated_at),
            "sources": [
                {
                    "sourceTag": summary.source_tag,
                    "recordCount": summary.record_count,
                    "priorityRank": summary.priority_rank,
                }
                for summary in metadata.sources
            ],
            "totalActions": metadata.total_actions,
            "categories": list(metadata.categories),
        },
        "actions": {
            identifier: encode_record(database.actions[identifier])
            for identifier in sorted(database.actions)
        },
    }


def encode_ledger(ledger: Ledger) -> dict[str, Any]:
    return {
        "lastUpdateTimestamp": _timestamp(ledger.last_update),
        "schemaVersion": ledger.schema_version,
    }


def encode_run_report(report: RunReport) -> dict[str, Any]:
    return {
        "timestamp": _timestamp(report.timestamp),
        "durationSeconds": report.duration_seconds,
        "actionsFound": report.actions_found,
        "newActions": report.new_actions,
        "updatedActions": report.updated_actions,
        "sourcesTouched": list(report.sources_touched),
        "phaseCounts": dict(report.phase_counts),
        "success": report.success,
    }


def encode_error_report(report: ErrorReport) -> dict[str, Any]:
    return {
        "timestamp": _timestamp(report.timestamp),
        "message": report.message,
        "phase": report.phase,
        "success": False,
    }


# Decoding --------------------------------------------------------------------


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SourceSummaryPayload(DocumentModel):
    source_tag: str = Field(alias="sourceTag")
    record_count: int = Field(default=0, alias="recordCount")
    priority_rank: int = Field(default=0, alias="priorityRank")


class CatalogMetadataPayload(DocumentModel):
    version: str = CATALOG_SCHEMA_VERSION
    generated_at: datetime = Field(default=EPOCH, alias="generatedAt")
    sources: list[SourceSummaryPayload] = Field(default_factory=list[SourceSummaryPayload])
    categories: list[str] = Field(default_factory=list[str])

    @field_validator("generated_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class CatalogPayload(DocumentModel):
    metadata: CatalogMetadataPayload = Field(default_factory=CatalogMetadataPayload)
    actions: dict[str, ActionPayload] = Field(default_factory=dict[str, ActionPayload])


class LedgerPayload(DocumentModel):
    last_update: datetime = Field(
        default=EPOCH,
        validation_alias=AliasChoices("lastUpdateTimestamp", "lastUpdate", "last_update"),
    )
    schema_version: str = Field(default=LEDGER_SCHEMA_VERSION, alias="schemaVersion")

    @field_validator("last_update")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


def decode_database(payload: bytes | str) -> CanonicalDatabase:
    """Rebuild a persisted catalog.

    Stored confidence is trusted as-is; it was already reconciled when written.
    """

    document = CatalogPayload.model_validate_json(payload)
    actions = {
        identifier: normalize_record(identifier, action.to_raw_action(), trust_confidence=True)
        for identifier, action in document.actions.items()
    }
    metadata = document.metadata
    return CanonicalDatabase(
        metadata=CatalogMetadata(
            generated_at=metadata.generated_at,
            total_actions=len(actions),
            categories=tuple(metadata.categories) or distinct_categories(actions.values()),
            sources=tuple(
                SourceSummary(
                    source_tag=summary.source_tag,
                    record_count=summary.record_count,
                    priority_rank=summary.priority_rank,
                )
                for summary in metadata.sources
            ),
            version=metadata.version,
        ),
        actions=actions,
    )


def decode_ledger(payload: bytes | str) -> Ledger:
    document = LedgerPayload.model_validate_json(payload)
    return Ledger(last_update=document.last_update, schema_version=document.schema_version)
