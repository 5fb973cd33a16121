"""Domain model for the action catalog."""

from __future__ import annotations

from .action import ActionRecord, InputSpec, OutputSpec, Parameter
from .catalog import CATALOG_SCHEMA_VERSION, CanonicalDatabase, CatalogMetadata, SourceSummary
from .enums import Confidence, DiscoveryPhase, ParameterType, SchedulerState
from .reports import (
    EPOCH,
    LEDGER_SCHEMA_VERSION,
    DiscoveryRun,
    ErrorReport,
    Ledger,
    RunReport,
)

__all__ = [
    "CATALOG_SCHEMA_VERSION",
    "EPOCH",
    "LEDGER_SCHEMA_VERSION",
    "ActionRecord",
    "CanonicalDatabase",
    "CatalogMetadata",
    "Confidence",
    "DiscoveryPhase",
    "DiscoveryRun",
    "ErrorReport",
    "InputSpec",
    "Ledger",
    "OutputSpec",
    "Parameter",
    "ParameterType",
    "RunReport",
    "SchedulerState",
    "SourceSummary",
]
