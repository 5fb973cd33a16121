"""Reconciliation core: normalize, merge, validate and summarise action records.

Flow for a merge run:
1) adapters resolve each raw payload's shape into ``raw.RawAction``
2) ``Reconciler`` normalizes and merges batches in priority order
3) ``build_database`` filters through the validation policy and sorts
4) ``render_digest`` produces the bounded Markdown summary
"""

from __future__ import annotations

from .catalog import (
    ValidationSummary,
    build_database,
    distinct_categories,
    refresh_database,
    sort_actions,
)
from .categorize import CATEGORY_PATTERNS, DEFAULT_CATEGORY, categorize
from .digest import render_digest
from .merge import merge_parameters, merge_record
from .normalize import infer_record, name_from_identifier, normalize_record
from .raw import (
    BareKeys,
    KeyedParameters,
    ParameterObjects,
    RawAction,
    RawParameter,
    RawParameters,
)
from .reconcile import Reconciler, SourceBatch
from .validate import DEFAULT_POLICY, ValidationPolicy, is_valid

__all__ = [
    "CATEGORY_PATTERNS",
    "DEFAULT_CATEGORY",
    "DEFAULT_POLICY",
    "BareKeys",
    "KeyedParameters",
    "ParameterObjects",
    "RawAction",
    "RawParameter",
    "RawParameters",
    "Reconciler",
    "SourceBatch",
    "ValidationPolicy",
    "ValidationSummary",
    "build_database",
    "categorize",
    "distinct_categories",
    "infer_record",
    "is_valid",
    "merge_parameters",
    "merge_record",
    "name_from_identifier",
    "normalize_record",
    "refresh_database",
    "render_digest",
    "sort_actions",
]
