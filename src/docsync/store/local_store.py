"""LocalDocumentStore: durable document collection + last-sync timestamp."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Sequence, TypeVar

from docsync.errors import StorageError
from docsync.models import DocumentRecord
from docsync.util.time import parse_timestamp, to_timestamp

from .kv import KeyValueBackend

T = TypeVar("T")

_LOGGER = logging.getLogger(__name__)

DOCUMENTS_KEY: str = "@pdf_documents"
SYNC_TIMESTAMP_KEY: str = "@pdf_last_sync"


class LocalDocumentStore:
    """
    Persistent local store for the document collection.

    Policy:
        - Reads never raise: a read fault degrades to "no local data".
        - Writes raise StorageError: the data was not durably saved.
        - The collection is always replaced as a whole (last writer wins).
        - Entries that fail to decode are hidden from callers but written
          back unchanged by save(); only clear() drops them.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._undecoded: list[Any] = []

    async def load(self) -> list[DocumentRecord]:
        self._undecoded = []
        try:
            raw = await self._call(self._backend.get, DOCUMENTS_KEY)
        except StorageError as exc:
            _LOGGER.warning("Local store read failed, using empty collection: %s", exc)
            return []
        if not raw:
            return []

        try:
            payload = json.loads(raw)
        except ValueError as exc:
            _LOGGER.warning("Local store payload is not valid JSON: %s", exc)
            return []
        if not isinstance(payload, list):
            _LOGGER.warning("Local store payload is not a list; ignoring it")
            return []

        records: list[DocumentRecord] = []
        undecoded: list[Any] = []
        for entry in payload:
            try:
                records.append(DocumentRecord.from_dict(entry))
            except (TypeError, ValueError) as exc:
                _LOGGER.warning("Skipping malformed local document (kept on disk): %s", exc)
                undecoded.append(entry)
        self._undecoded = undecoded
        return records

    async def save(self, records: Sequence[DocumentRecord]) -> None:
        entries: list[Any] = [r.to_dict() for r in records]
        entries.extend(self._undecoded)
        raw = json.dumps(entries, ensure_ascii=False)
        await self._call(self._backend.set, DOCUMENTS_KEY, raw)

    async def read_sync_timestamp(self) -> Optional[datetime]:
        try:
            raw = await self._call(self._backend.get, SYNC_TIMESTAMP_KEY)
        except StorageError as exc:
            _LOGGER.warning("Could not read last sync timestamp: %s", exc)
            return None
        if not raw:
            return None
        try:
            return parse_timestamp(raw)
        except ValueError:
            _LOGGER.warning("Ignoring unparsable last sync timestamp %r", raw)
            return None

    async def write_sync_timestamp(self, dt: datetime) -> None:
        await self._call(self._backend.set, SYNC_TIMESTAMP_KEY, to_timestamp(dt))

    async def clear(self) -> None:
        await self._call(self._backend.remove_many, [DOCUMENTS_KEY, SYNC_TIMESTAMP_KEY])
        self._undecoded = []

    async def _call(self, func: Callable[..., T], *args: object) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except StorageError:
            raise
        except OSError as exc:
            raise StorageError("Local store I/O failed", cause=exc) from exc
