from __future__ import annotations

import pytest

from actioncatalog.domain.reconciliation import CATEGORY_PATTERNS, DEFAULT_CATEGORY, categorize


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("is.workflow.actions.gettext", "text"),
        ("is.workflow.actions.setvolume", "device"),
        ("is.workflow.actions.takephoto", "media"),
        ("is.workflow.actions.GetCurrentLocation", "location"),
        ("is.workflow.actions.newone", DEFAULT_CATEGORY),
    ],
)
def test_categorize_by_keyword(identifier: str, expected: str) -> None:
    assert categorize(identifier) == expected


def test_keywords_match_anywhere_in_identifier() -> None:
    # only the vendor segment contains a keyword ("app")
    assert categorize("com.apple.mobilenotes.note") == "apps"


def test_first_matching_category_wins() -> None:
    # "count" (scripting) is listed before "play" (media)
    assert categorize("is.workflow.actions.playcount") == "scripting"


def test_categorize_is_repeatable() -> None:
    identifiers = ["is.workflow.actions.sendmessage", "com.apple.weather", "plain"]

    first = [categorize(identifier) for identifier in identifiers]
    second = [categorize(identifier) for identifier in identifiers]

    assert first == second


def test_custom_table_is_used_in_order() -> None:
    table = (("alpha", ("shared",)), ("beta", ("shared", "only")))

    assert categorize("x.shared.only", table) == "alpha"
    assert categorize("x.only", table) == "beta"
    assert categorize("x.none", table) == DEFAULT_CATEGORY


def test_default_table_covers_known_categories() -> None:
    names = [name for name, _ in CATEGORY_PATTERNS]

    assert names[0] == "scripting"
    assert len(names) == len(set(names)) == 13
