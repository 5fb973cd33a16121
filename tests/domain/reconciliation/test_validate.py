from __future__ import annotations

import pytest

from actioncatalog.domain.model import Confidence
from actioncatalog.domain.reconciliation import ValidationPolicy, is_valid
from tests.helpers.actions import make_record


@pytest.mark.parametrize("confidence", list(Confidence))
@pytest.mark.parametrize("deprecated", [True, False])
def test_bare_identifier_is_always_valid(confidence: Confidence, deprecated: bool) -> None:
    record = make_record("simpleid", confidence=confidence, deprecated=deprecated)

    assert is_valid("simpleid", record)


def test_unrecognized_namespace_is_rejected() -> None:
    assert not is_valid("weird.id", make_record("weird.id"))


def test_secondary_vendor_namespace_is_valid() -> None:
    record = make_record("com.apple.mobilenotes.SharingExtension", deprecated=True)

    assert is_valid(record.identifier, record)


def test_deprecated_primary_namespace_requires_authoritative() -> None:
    identifier = "is.workflow.actions.oldthing"

    assert not is_valid(
        identifier, make_record(identifier, deprecated=True, confidence=Confidence.HIGH)
    )
    assert is_valid(
        identifier,
        make_record(identifier, deprecated=True, confidence=Confidence.AUTHORITATIVE),
    )
    assert is_valid(identifier, make_record(identifier))


def test_custom_policy_prefixes() -> None:
    policy = ValidationPolicy(primary_prefix="org.example.", vendor_prefix="net.vendor.")

    assert is_valid("net.vendor.thing", make_record("net.vendor.thing"), policy)
    assert not is_valid("com.apple.thing", make_record("com.apple.thing"), policy)
