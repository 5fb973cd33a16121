"""Admission policy for canonical output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from actioncatalog.domain.model import Confidence

if TYPE_CHECKING:
    from actioncatalog.domain.model import ActionRecord


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    primary_prefix: str = "is.workflow.actions."
    vendor_prefix: str = "com.apple."
    separator: str = "."

    def is_valid(self, identifier: str, record: ActionRecord) -> bool:
        if self.separator not in identifier:
            return True
        if not identifier.startswith(self.primary_prefix):
            return identifier.startswith(self.vendor_prefix)
        if record.deprecated:
            return record.confidence is Confidence.AUTHORITATIVE
        return True


DEFAULT_POLICY = ValidationPolicy()


def is_valid(
    identifier: str, record: ActionRecord, policy: ValidationPolicy = DEFAULT_POLICY
) -> bool:
    """Whether ``record`` may appear in canonical output."""

    return policy.is_valid(identifier, record)
