"""One discovery update: probe the environment, then integrate what was found."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING

from actioncatalog.domain.clock import utcnow
from actioncatalog.domain.model import DiscoveryPhase, RunReport
from actioncatalog.domain.reconciliation import refresh_database

from .errors import IntegrationError
from .integration import DISCOVERY_SOURCE, empty_database, integrate_identifiers
from .phases import (
    PhaseRunner,
    scan_external_resources,
    scan_installed_items,
    scan_known_locations,
)
from .probes import identifier_pattern, no_external_resources

if TYPE_CHECKING:
    from collections.abc import Mapping

    from actioncatalog.config import DiscoveryConfig
    from actioncatalog.domain.clock import Clock
    from actioncatalog.domain.ports import DiscoveryStore

    from .integration import IntegrationResult
    from .phases import PhaseOutcome
    from .probes import EnvironmentProbe, ExternalResourceProbe

log = logging.getLogger(__name__)


@dataclass(slots=True)
class DiscoveryEngine:
    """Run the four discovery phases in order and return a run report.

    The installed-item and known-location scans only read external state and run
    in parallel. Integration is the single writer and runs after both finish.
    """

    probe: EnvironmentProbe
    store: DiscoveryStore
    config: DiscoveryConfig
    external: ExternalResourceProbe = no_external_resources
    clock: Clock = utcnow
    source: str = DISCOVERY_SOURCE
    _runner: PhaseRunner = field(init=False)

    def __post_init__(self) -> None:
        self._runner = PhaseRunner(timeout_seconds=self.config.phase_timeout_seconds)

    def run(self) -> RunReport:
        started = self.clock()
        pattern = identifier_pattern(self.config.identifier_prefix)

        outcomes = self._runner.run(
            {
                DiscoveryPhase.INSTALLED_ITEMS: partial(
                    scan_installed_items,
                    self.probe,
                    pattern=pattern,
                    sample_size=self.config.sample_size,
                ),
                DiscoveryPhase.KNOWN_LOCATIONS: partial(
                    scan_known_locations, self.probe, pattern=pattern
                ),
            }
        )
        outcomes |= self._runner.run(
            {
                DiscoveryPhase.EXTERNAL_RESOURCES: partial(
                    scan_external_resources, self.external, pattern=pattern
                ),
            }
        )

        found = _unique_identifiers(outcomes)
        integration = self._integrate(found)

        finished = self.clock()
        return RunReport(
            timestamp=finished,
            duration_seconds=round((finished - started).total_seconds(), 3),
            actions_found=len(found),
            new_actions=integration.new_actions,
            updated_actions=integration.updated_actions,
            sources_touched=tuple(
                phase.value for phase, outcome in outcomes.items() if outcome.identifiers
            ),
            phase_counts={
                phase.value: len(outcome.identifiers) for phase, outcome in outcomes.items()
            },
        )

    def _integrate(self, identifiers: list[str]) -> IntegrationResult:
        try:
            database = self.store.load_catalog() or empty_database(generated_at=self.clock())
            result = integrate_identifiers(database, identifiers, source=self.source)
            self.store.save_catalog(refresh_database(database, generated_at=self.clock()))
        except Exception as exc:
            raise IntegrationError(f"Could not integrate discovered actions: {exc}") from exc
        return result


def _unique_identifiers(outcomes: Mapping[DiscoveryPhase, PhaseOutcome]) -> list[str]:
    return list(
        dict.fromkeys(
            identifier for outcome in outcomes.values() for identifier in outcome.identifiers
        )
    )
