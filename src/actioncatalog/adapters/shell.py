"""Environment probe that shells out to macOS tooling."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from actioncatalog.config import DiscoveryConfig
    from actioncatalog.domain.discovery import PhaseDeadline

log = logging.getLogger(__name__)

SHORTCUTS_COMMAND = "shortcuts"


@dataclass(slots=True)
class ShellEnvironmentProbe:
    """Enumerate installed shortcuts and scan system bundles via subprocesses.

    Every command runs with ``command_timeout_seconds``, capped at what is left of
    the phase deadline. A command that fails or times out raises, and the phase
    runner turns that into an empty phase; once the deadline has passed no new
    command is started.
    """

    config: DiscoveryConfig

    def enumerate_installed_items(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]:
        output = self._run([SHORTCUTS_COMMAND, "list"], deadline=deadline)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def inspect_item(self, name: str, *, deadline: PhaseDeadline | None = None) -> str:
        return self._run([SHORTCUTS_COMMAND, "view", name], deadline=deadline)

    def scan_known_locations(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]:
        blobs: list[str] = []
        for location in self.config.known_locations:
            if deadline is not None and deadline.expired:
                log.info("Phase deadline reached; not scanning %s", location)
                break
            try:
                files = self._candidate_files(location, deadline)
                blobs.extend(self._run(["strings", path], deadline=deadline) for path in files)
            except (OSError, subprocess.SubprocessError) as exc:
                log.debug("Skipping location %s: %s", location, exc)
        return blobs

    def _candidate_files(self, location: str, deadline: PhaseDeadline | None) -> list[str]:
        output = self._run(
            ["find", location, "-type", "f", "-perm", "-u+x"], deadline=deadline, check=False
        )
        files = [line for line in output.splitlines() if line.strip()]
        return files[: self.config.files_per_location]

    def _run(
        self, command: list[str], *, deadline: PhaseDeadline | None = None, check: bool = True
    ) -> str:
        timeout = self.config.command_timeout_seconds
        if deadline is not None:
            timeout = min(timeout, deadline.check(command[0]))
        log.debug("Running %s", " ".join(command))
        completed = subprocess.run(  # noqa: S603
            command,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=check,
        )
        return completed.stdout
