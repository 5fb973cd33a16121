"""Capability ports for probing the runtime environment.

A real adapter shells out to OS tooling; tests wire in scripted fakes. The
engine only sees these protocols.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .deadline import PhaseDeadline


@runtime_checkable
class EnvironmentProbe(Protocol):
    def enumerate_installed_items(
        self, *, deadline: PhaseDeadline | None = None
    ) -> Sequence[str]: ...

    def inspect_item(self, name: str, *, deadline: PhaseDeadline | None = None) -> str: ...

    def scan_known_locations(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]: ...


class ExternalResourceProbe(Protocol):
    """Return raw text blobs from outside the local environment."""

    def __call__(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]: ...


def no_external_resources(*, deadline: PhaseDeadline | None = None) -> Sequence[str]:
    return ()


def identifier_pattern(prefix: str) -> re.Pattern[str]:
    """Prefix followed by an alphanumeric/underscore token."""

    return re.compile(re.escape(prefix) + r"[A-Za-z0-9_]+")


def extract_identifiers(blobs: Iterable[str], pattern: re.Pattern[str]) -> list[str]:
    """All pattern matches across ``blobs``, first-seen order, without duplicates."""

    found: dict[str, None] = {}
    for blob in blobs:
        for match in pattern.findall(blob):
            found.setdefault(match, None)
    return list(found)
