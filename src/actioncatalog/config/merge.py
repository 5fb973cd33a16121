"""Merge pipeline source configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_list
from .errors import ConfigurationError

DEFAULT_SOURCE_FILES: Final[tuple[str, ...]] = (
    "authoritative-actions.json",
    "final-action-database.json",
    "comprehensive-action-database.json",
    "enhanced-action-database.json",
    "action-database.json",
)


@dataclass(frozen=True, slots=True)
class MergeConfig:
    """Where the source files live and the order they are merged in.

    The first file is the authoritative source; order is part of the contract
    because the authoritative-protection rule depends on it.
    """

    sources_dir: Path
    source_files: tuple[str, ...] = DEFAULT_SOURCE_FILES

    def __post_init__(self) -> None:
        if not self.source_files:
            raise ConfigurationError("At least one merge source file is required")
        if len(set(self.source_files)) != len(self.source_files):
            raise ConfigurationError("Merge source files must be unique")

    @property
    def authoritative_source(self) -> str:
        return self.source_files[0]

    def source_paths(self) -> tuple[tuple[str, Path], ...]:
        base = self.sources_dir.expanduser().resolve()
        return tuple((name, base / name) for name in self.source_files)


def get_merge_config(*, default_dir: Path) -> MergeConfig:
    env_dir = os.getenv("ACTIONCATALOG_SOURCES_DIR")
    files = env_list("ACTIONCATALOG_SOURCE_FILES") or DEFAULT_SOURCE_FILES
    return MergeConfig(
        sources_dir=Path(env_dir) if env_dir else default_dir,
        source_files=files,
    )
