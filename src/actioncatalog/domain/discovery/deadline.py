"""Time budget shared by the tasks of one phase run."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from time import monotonic

from .errors import DiscoveryError


class DeadlineExceededError(DiscoveryError):
    """Raised by probes asked to start work after the phase budget ran out."""


@dataclass(slots=True)
class PhaseDeadline:
    """Monotonic deadline that the phase runner cancels once it stops waiting.

    Tasks check ``expired`` between units of work and cap blocking calls at
    ``remaining()``, so an abandoned task winds down instead of running on.
    """

    seconds: float
    _expires_at: float = field(init=False)
    _cancelled: threading.Event = field(init=False, default_factory=threading.Event)

    def __post_init__(self) -> None:
        self._expires_at = monotonic() + self.seconds

    def remaining(self) -> float:
        if self._cancelled.is_set():
            return 0.0
        return max(0.0, self._expires_at - monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return whether it was cancelled."""

        return self._cancelled.wait(timeout)

    def check(self, what: str) -> float:
        """Return the remaining budget, raising if none is left to start ``what``."""

        remaining = self.remaining()
        if remaining <= 0.0:
            raise DeadlineExceededError(f"Phase deadline passed before {what}")
        return remaining
