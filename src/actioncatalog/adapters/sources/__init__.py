"""Merge source adapters: file loading and payload schema."""

from __future__ import annotations

from .loader import (
    LoadedSource,
    MissingSource,
    SourceLoadResult,
    UnreadableSource,
    load_sources,
    read_source,
)
from .schema import ActionPayload, ParameterPayload, SourceDocument, resolve_parameter_shape

__all__ = [
    "ActionPayload",
    "LoadedSource",
    "MissingSource",
    "ParameterPayload",
    "SourceDocument",
    "SourceLoadResult",
    "UnreadableSource",
    "load_sources",
    "read_source",
    "resolve_parameter_shape",
]
