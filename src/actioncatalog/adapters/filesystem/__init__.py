"""Filesystem adapters for the catalog and discovery bookkeeping."""

from __future__ import annotations

from .documents import decode_database, decode_ledger, encode_database, encode_record
from .store import JsonFileStore, atomic_write_text

__all__ = [
    "JsonFileStore",
    "atomic_write_text",
    "decode_database",
    "decode_ledger",
    "encode_database",
    "encode_record",
]
