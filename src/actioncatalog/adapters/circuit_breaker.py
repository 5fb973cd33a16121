"""Three-state failure-threshold breaker for calls to external services."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)


class CircuitState(StrEnum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CircuitOpenError(RuntimeError):
    """Raised when a call is rejected because the circuit is open."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Circuit {name} is OPEN; service unavailable")
        self.name = name


@dataclass(frozen=True, slots=True)
class CircuitStats:
    state: CircuitState
    failures: int
    successes: int
    requests: int
    last_failure_time: float | None
    next_attempt_time: float | None

    @property
    def failure_rate(self) -> float:
        return self.failures / self.requests if self.requests else 0.0


class CircuitBreaker:
    """Fail fast after ``failure_threshold`` failures until ``recovery_timeout`` elapses.

    After the timeout one trial call is let through (``HALF_OPEN``): success closes
    the circuit and clears the failure count, failure opens it again. A fallback,
    when given, is used instead of raising whenever the circuit is or becomes open.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        failure_threshold: int = 5,
        recovery_timeout_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout_seconds = recovery_timeout_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._reset_counters()

    @property
    def state(self) -> CircuitState:
        return self._state

    def call[T](self, func: Callable[[], T], fallback: Callable[[], T] | None = None) -> T:
        if not self._admit():
            if fallback is not None:
                log.info("Circuit %s open; using fallback", self.name)
                return fallback()
            raise CircuitOpenError(self.name)
        try:
            result = func()
        except Exception:
            if self._record_failure() and fallback is not None:
                log.info("Circuit %s opened; using fallback", self.name)
                return fallback()
            raise
        self._record_success()
        return result

    async def acall[T](
        self,
        func: Callable[[], Awaitable[T]],
        fallback: Callable[[], Awaitable[T]] | None = None,
    ) -> T:
        if not self._admit():
            if fallback is not None:
                log.info("Circuit %s open; using fallback", self.name)
                return await fallback()
            raise CircuitOpenError(self.name)
        try:
            result = await func()
        except Exception:
            if self._record_failure() and fallback is not None:
                log.info("Circuit %s opened; using fallback", self.name)
                return await fallback()
            raise
        self._record_success()
        return result

    def stats(self) -> CircuitStats:
        with self._lock:
            return CircuitStats(
                state=self._state,
                failures=self._failures,
                successes=self._successes,
                requests=self._requests,
                last_failure_time=self._last_failure_time,
                next_attempt_time=self._next_attempt_time,
            )

    def reset(self) -> None:
        with self._lock:
            self._reset_counters()
        log.info("Circuit %s reset", self.name)

    def force_open(self) -> None:
        with self._lock:
            self._open()
        log.warning("Circuit %s forced OPEN", self.name)

    def force_close(self) -> None:
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failures = 0
            self._next_attempt_time = None
        log.info("Circuit %s forced CLOSED", self.name)

    def _reset_counters(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._successes = 0
        self._requests = 0
        self._last_failure_time: float | None = None
        self._next_attempt_time: float | None = None

    def _admit(self) -> bool:
        with self._lock:
            self._requests += 1
            if (
                self._state is CircuitState.OPEN
                and self._next_attempt_time is not None
                and self._clock() >= self._next_attempt_time
            ):
                self._state = CircuitState.HALF_OPEN
                log.info("Circuit %s HALF_OPEN; allowing a trial call", self.name)
            return self._state is not CircuitState.OPEN

    def _record_success(self) -> None:
        with self._lock:
            self._successes += 1
            if self._state is CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                self._failures = 0
                self._next_attempt_time = None
                log.info("Circuit %s recovered; CLOSED", self.name)

    def _record_failure(self) -> bool:
        """Count a failure; return whether the circuit is now open."""

        with self._lock:
            self._failures += 1
            self._last_failure_time = self._clock()
            if self._state is CircuitState.HALF_OPEN or self._failures >= self.failure_threshold:
                self._open()
                log.warning(
                    "Circuit %s OPEN after %s failure(s)", self.name, self._failures
                )
            return self._state is CircuitState.OPEN

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._next_attempt_time = self._clock() + self.recovery_timeout_seconds
