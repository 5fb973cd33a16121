"""Failures raised by the discovery engine."""

from __future__ import annotations

from actioncatalog.domain.model import DiscoveryPhase

UPDATE_PHASE = "update"


class DiscoveryError(RuntimeError):
    """Base error for a discovery run; ``phase`` names where it failed."""

    def __init__(self, message: str, *, phase: str = UPDATE_PHASE) -> None:
        super().__init__(message)
        self.phase = phase


class IntegrationError(DiscoveryError):
    """Raised when the persisted catalog cannot be loaded or replaced."""

    def __init__(self, message: str) -> None:
        super().__init__(message, phase=DiscoveryPhase.INTEGRATION.value)
