"""Local persistence exports for docsync."""

from __future__ import annotations

from .kv import JsonFileBackend, KeyValueBackend, MemoryBackend
from .local_store import DOCUMENTS_KEY, SYNC_TIMESTAMP_KEY, LocalDocumentStore

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "LocalDocumentStore",
    "DOCUMENTS_KEY",
    "SYNC_TIMESTAMP_KEY",
]
