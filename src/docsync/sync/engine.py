"""SyncEngine: one reconciliation pass (local store <-> remote gateway)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from docsync.models import SyncReport
from docsync.store import LocalDocumentStore
from docsync.util.time import now_utc

from .reconcile import reconcile

if TYPE_CHECKING:
    from docsync.gateway import RemoteGateway
    from docsync.mirror import MirrorTracker

_LOGGER = logging.getLogger(__name__)


class SyncEngine:
    """Pull the remote listing, merge it into the local store, report."""

    def __init__(
        self,
        store: LocalDocumentStore,
        gateway: "RemoteGateway",
        *,
        mirror: Optional["MirrorTracker"] = None,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._mirror = mirror
        self._clock = clock

    async def run(self) -> SyncReport:
        """
        Run one pass.

        Policy:
            - Remote failures are collected into `errors`, never raised.
            - Local write failures raise StorageError.
            - The sync timestamp is only written when the listing was healthy.
        """
        started_at = self._clock()
        errors: list[str] = []

        local = await self._store.load()
        listing = await self._gateway.fetch_listing()
        if listing.error:
            errors.append(listing.error)

        outcome = reconcile(local, listing.documents)
        await self._store.save(outcome.documents)

        if not listing.degraded:
            await self._store.write_sync_timestamp(self._clock())

        if self._mirror is not None:
            errors.extend(failure.describe() for failure in self._mirror.drain_errors())

        report = SyncReport(
            success=not listing.degraded,
            local_count=len(local),
            remote_count=len(listing.documents),
            new_documents=outcome.new_documents,
            updated_documents=outcome.updated_documents,
            deleted_documents=outcome.deleted_documents,
            errors=tuple(errors),
            started_at=started_at,
            finished_at=self._clock(),
        )
        _LOGGER.info(
            "Sync pass %s: local=%d remote=%d new=%d updated=%d errors=%d",
            "succeeded" if report.success else "degraded",
            report.local_count,
            report.remote_count,
            report.new_documents,
            report.updated_documents,
            len(report.errors),
        )
        return report
