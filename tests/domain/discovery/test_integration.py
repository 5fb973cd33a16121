from __future__ import annotations

from datetime import UTC, datetime

import pytest

from actioncatalog.domain.discovery import (
    DISCOVERY_SOURCE,
    empty_database,
    integrate_identifiers,
    upgrade_one_step,
)
from actioncatalog.domain.model import Confidence
from tests.helpers.actions import make_record


@pytest.mark.parametrize(
    ("before", "after"),
    [
        (Confidence.LOW, Confidence.MEDIUM),
        (Confidence.MEDIUM, Confidence.HIGH),
        (Confidence.HIGH, Confidence.HIGH),
        (Confidence.AUTHORITATIVE, Confidence.AUTHORITATIVE),
    ],
)
def test_upgrade_one_step(before: Confidence, after: Confidence) -> None:
    assert upgrade_one_step(before) is after


def test_new_identifier_becomes_low_confidence_record() -> None:
    database = empty_database(generated_at=datetime(2025, 1, 1, tzinfo=UTC))

    result = integrate_identifiers(database, ["is.workflow.actions.newone"])

    record = database.actions["is.workflow.actions.newone"]
    assert (result.new_actions, result.updated_actions) == (1, 0)
    assert record.confidence is Confidence.LOW
    assert record.sources == {DISCOVERY_SOURCE}
    assert record.category == "general"


def test_known_identifier_is_credited_once() -> None:
    database = empty_database(generated_at=datetime(2025, 1, 1, tzinfo=UTC))
    database.actions["is.workflow.actions.gettext"] = make_record(
        confidence=Confidence.MEDIUM, sources={"final.json"}
    )

    first = integrate_identifiers(database, ["is.workflow.actions.gettext"])
    second = integrate_identifiers(database, ["is.workflow.actions.gettext"])

    record = database.actions["is.workflow.actions.gettext"]
    assert first.updated_actions == 1
    assert second.updated_actions == 0
    assert record.confidence is Confidence.HIGH
    assert record.sources == {"final.json", DISCOVERY_SOURCE}


def test_rediscovered_record_is_not_upgraded() -> None:
    database = empty_database(generated_at=datetime(2025, 1, 1, tzinfo=UTC))
    integrate_identifiers(database, ["is.workflow.actions.newone"])

    result = integrate_identifiers(database, ["is.workflow.actions.newone"])

    assert result.updated_actions == 0
    assert database.actions["is.workflow.actions.newone"].confidence is Confidence.LOW


def test_discovery_never_grants_authoritative() -> None:
    database = empty_database(generated_at=datetime(2025, 1, 1, tzinfo=UTC))
    database.actions["a.b"] = make_record("a.b", confidence=Confidence.HIGH)
    database.actions["c.d"] = make_record("c.d", confidence=Confidence.AUTHORITATIVE)

    integrate_identifiers(database, ["a.b", "c.d", "e.f", "e.f"])

    assert database.actions["a.b"].confidence is Confidence.HIGH
    assert database.actions["c.d"].confidence is Confidence.AUTHORITATIVE
    assert database.actions["e.f"].confidence is Confidence.LOW
