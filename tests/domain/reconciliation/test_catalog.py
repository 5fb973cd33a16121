from __future__ import annotations

from datetime import UTC, datetime

from actioncatalog.domain.model import Confidence, SourceSummary
from actioncatalog.domain.reconciliation import build_database, refresh_database, render_digest
from tests.helpers.actions import make_record

GENERATED_AT = datetime(2025, 1, 1, tzinfo=UTC)


def test_build_database_filters_and_sorts() -> None:
    records = {
        "is.workflow.actions.zeta": make_record("is.workflow.actions.zeta", category="web"),
        "weird.id": make_record("weird.id"),
        "is.workflow.actions.alpha": make_record("is.workflow.actions.alpha", category="text"),
        "is.workflow.actions.old": make_record(
            "is.workflow.actions.old", deprecated=True, confidence=Confidence.MEDIUM
        ),
        "bare": make_record("bare", category="general"),
    }
    summaries = [SourceSummary("authoritative-actions.json", 5, 1)]

    database, summary = build_database(records, sources=summaries, generated_at=GENERATED_AT)

    assert list(database.actions) == [
        "bare",
        "is.workflow.actions.alpha",
        "is.workflow.actions.zeta",
    ]
    assert (summary.valid, summary.rejected) == (3, 2)
    assert database.metadata.total_actions == 3
    assert database.metadata.categories == ("general", "text", "web")
    assert database.metadata.sources == tuple(summaries)
    assert "weird.id" in records


def test_refresh_database_resorts_after_integration() -> None:
    records = {"is.workflow.actions.b": make_record("is.workflow.actions.b")}
    database, _ = build_database(records, sources=(), generated_at=GENERATED_AT)
    database.actions["a"] = make_record("a", category="apps")

    refreshed = refresh_database(database, generated_at=datetime(2025, 2, 1, tzinfo=UTC))

    assert list(refreshed.actions) == ["a", "is.workflow.actions.b"]
    assert refreshed.metadata.total_actions == 2
    assert refreshed.metadata.categories == ("apps", "text")
    assert refreshed.metadata.generated_at.month == 2


def test_digest_groups_by_category_and_caps_entries() -> None:
    records = {
        f"t{index:02d}": make_record(f"t{index:02d}", name=f"Text {index}", category="text")
        for index in range(53)
    }
    records["m"] = make_record(
        "m",
        name="Mixer",
        category="media",
        description="Mixes audio",
        parameters=["a", "b", "c", "d"],
    )
    records["n"] = make_record("n", name="Note", category="media", parameters=["x"])
    database, _ = build_database(records, sources=(), generated_at=GENERATED_AT)

    digest = render_digest(database)

    assert digest.startswith("# Action Reference")
    assert "Total Actions: 55" in digest
    assert digest.index("### Media") < digest.index("### Text")
    assert "- **Mixer** (`m`)\n  Mixes audio\n  Parameters: a, b, c..." in digest
    assert "  Parameters: x\n" in digest
    assert "Text 49" in digest
    assert "Text 50" not in digest
    assert "  ... and 3 more" in digest
