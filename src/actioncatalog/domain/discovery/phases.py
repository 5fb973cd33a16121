"""Discovery phases and the bounded-time runner that executes them."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .deadline import PhaseDeadline
from .probes import extract_identifiers

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable, Mapping
    from concurrent.futures import Future

    from actioncatalog.domain.model import DiscoveryPhase

    from .probes import EnvironmentProbe, ExternalResourceProbe

log = logging.getLogger(__name__)


class PhaseTask(Protocol):
    def __call__(self, *, deadline: PhaseDeadline) -> Iterable[str]: ...


@dataclass(frozen=True, slots=True)
class PhaseOutcome:
    """Identifiers one phase produced; a failed phase has none and a ``failure`` reason."""

    phase: DiscoveryPhase
    identifiers: tuple[str, ...] = ()
    failure: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def scan_installed_items(
    probe: EnvironmentProbe,
    *,
    pattern: re.Pattern[str],
    sample_size: int,
    deadline: PhaseDeadline | None = None,
) -> list[str]:
    names = list(probe.enumerate_installed_items(deadline=deadline))
    sample = names[:sample_size]
    log.info("Inspecting %s of %s installed items", len(sample), len(names))

    blobs: list[str] = []
    for index, name in enumerate(sample):
        if deadline is not None and deadline.expired:
            log.info("Phase deadline reached; stopping after %s of %s items", index, len(sample))
            break
        try:
            blobs.append(probe.inspect_item(name, deadline=deadline))
        except Exception as exc:  # noqa: BLE001
            log.debug("Skipping installed item %r: %s", name, exc)
    return extract_identifiers(blobs, pattern)


def scan_known_locations(
    probe: EnvironmentProbe,
    *,
    pattern: re.Pattern[str],
    deadline: PhaseDeadline | None = None,
) -> list[str]:
    return extract_identifiers(probe.scan_known_locations(deadline=deadline), pattern)


def scan_external_resources(
    probe: ExternalResourceProbe,
    *,
    pattern: re.Pattern[str],
    deadline: PhaseDeadline | None = None,
) -> list[str]:
    return extract_identifiers(probe(deadline=deadline), pattern)


@dataclass(frozen=True, slots=True)
class PhaseRunner:
    """Run phase tasks concurrently, all sharing one ``timeout_seconds`` budget.

    A task that raises or overruns yields an empty outcome; it never aborts the
    caller. When the runner stops waiting it cancels the shared deadline, so an
    overrunning task stops at its next deadline check instead of being joined.
    """

    timeout_seconds: float

    def run(self, tasks: Mapping[DiscoveryPhase, PhaseTask]) -> dict[DiscoveryPhase, PhaseOutcome]:
        if not tasks:
            return {}
        executor = ThreadPoolExecutor(
            max_workers=len(tasks), thread_name_prefix="discovery-phase"
        )
        deadline = PhaseDeadline(self.timeout_seconds)
        try:
            futures = {
                phase: executor.submit(_materialize, task, deadline)
                for phase, task in tasks.items()
            }
            return {
                phase: self._collect(phase, future, deadline) for phase, future in futures.items()
            }
        finally:
            deadline.cancel()
            executor.shutdown(wait=False, cancel_futures=True)

    def _collect(
        self, phase: DiscoveryPhase, future: Future[tuple[str, ...]], deadline: PhaseDeadline
    ) -> PhaseOutcome:
        try:
            identifiers = future.result(timeout=deadline.remaining())
        except TimeoutError:
            log.warning("Phase %s timed out after %ss", phase, self.timeout_seconds)
            return PhaseOutcome(phase, failure=f"timed out after {self.timeout_seconds}s")
        except Exception as exc:  # noqa: BLE001
            log.warning("Phase %s failed: %s", phase, exc)
            return PhaseOutcome(phase, failure=str(exc) or type(exc).__name__)
        log.info("Phase %s found %s identifiers", phase, len(identifiers))
        return PhaseOutcome(phase, identifiers)


def _materialize(task: PhaseTask, deadline: PhaseDeadline) -> tuple[str, ...]:
    return tuple(task(deadline=deadline))
