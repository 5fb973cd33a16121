from __future__ import annotations

from typing import TYPE_CHECKING

from actioncatalog.adapters.sources import (
    LoadedSource,
    MissingSource,
    UnreadableSource,
    load_sources,
    read_source,
)
from actioncatalog.config import MergeConfig
from tests.helpers.actions import write_json

if TYPE_CHECKING:
    from pathlib import Path


def test_missing_file_is_reported(tmp_path: Path) -> None:
    result = read_source("action-database.json", tmp_path / "action-database.json")

    assert isinstance(result, MissingSource)


def test_malformed_file_is_skipped(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = read_source("broken.json", path)

    assert isinstance(result, UnreadableSource)
    assert "invalid source document" in result.reason


def test_loaded_file_becomes_batch(tmp_path: Path) -> None:
    path = write_json(
        tmp_path / "action-database.json",
        {"actions": {"is.workflow.actions.gettext": {"parameters": ["WFTextActionText"]}}},
    )

    result = read_source("action-database.json", path)

    assert isinstance(result, LoadedSource)
    assert result.batch.tag == "action-database.json"
    assert list(result.batch.records) == ["is.workflow.actions.gettext"]


def test_sources_are_read_in_priority_order(tmp_path: Path) -> None:
    write_json(tmp_path / "second.json", {"is.workflow.actions.comment": {}})
    config = MergeConfig(sources_dir=tmp_path, source_files=("first.json", "second.json"))

    results = load_sources(config)

    assert [result.tag for result in results] == ["first.json", "second.json"]
    assert isinstance(results[0], MissingSource)
    assert isinstance(results[1], LoadedSource)
