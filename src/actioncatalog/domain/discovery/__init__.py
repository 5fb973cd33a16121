"""Continuous discovery of previously unseen action identifiers."""

from __future__ import annotations

from .deadline import DeadlineExceededError, PhaseDeadline
from .engine import DiscoveryEngine
from .errors import DiscoveryError, IntegrationError
from .integration import (
    DISCOVERY_SOURCE,
    IntegrationResult,
    empty_database,
    integrate_identifiers,
    upgrade_one_step,
)
from .phases import PhaseOutcome, PhaseRunner
from .probes import (
    EnvironmentProbe,
    ExternalResourceProbe,
    extract_identifiers,
    identifier_pattern,
    no_external_resources,
)
from .reporting import UpdateReporter
from .scheduler import (
    DiscoveryScheduler,
    DiscoveryService,
    IntervalTicks,
    ScriptedTicks,
    TickSource,
    UpdateOutcome,
)

__all__ = [
    "DISCOVERY_SOURCE",
    "DeadlineExceededError",
    "DiscoveryEngine",
    "DiscoveryError",
    "DiscoveryScheduler",
    "DiscoveryService",
    "EnvironmentProbe",
    "ExternalResourceProbe",
    "IntegrationError",
    "IntegrationResult",
    "IntervalTicks",
    "PhaseDeadline",
    "PhaseOutcome",
    "PhaseRunner",
    "ScriptedTicks",
    "TickSource",
    "UpdateOutcome",
    "UpdateReporter",
    "empty_database",
    "extract_identifiers",
    "identifier_pattern",
    "integrate_identifiers",
    "no_external_resources",
    "upgrade_one_step",
]
