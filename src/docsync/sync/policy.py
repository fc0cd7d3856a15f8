"""Staleness policy: decides when a sync pass is due."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from docsync.store import LocalDocumentStore
from docsync.util.time import now_utc

DEFAULT_SYNC_INTERVAL: timedelta = timedelta(minutes=5)


class SyncPolicy:
    """
    `is_stale()` is True when no sync was ever recorded or the last one is
    older than `interval`. Read-only: the sync engine writes the timestamp.
    """

    def __init__(
        self,
        store: LocalDocumentStore,
        *,
        interval: timedelta = DEFAULT_SYNC_INTERVAL,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("interval must be positive")
        self._store = store
        self.interval = interval
        self._clock = clock

    async def is_stale(self) -> bool:
        last_sync = await self._store.read_sync_timestamp()
        if last_sync is None:
            return True
        return self._clock() - last_sync > self.interval
