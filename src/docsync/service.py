"""DocumentService: local-first facade over store, gateway and sync engine."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from docsync.config import DocSyncConfig
from docsync.errors import DocSyncError, InvalidStateError
from docsync.gateway import RemoteGateway
from docsync.mirror import MirrorTracker
from docsync.models import DocumentRecord, MirrorFailure, StatsSnapshot, SyncReport, UploadFile
from docsync.store import JsonFileBackend, LocalDocumentStore, MemoryBackend
from docsync.sync import SyncEngine, SyncPolicy
from docsync.util.files import MAX_FILE_SIZE, PDF_KIND, strip_extension, tags_from_filename
from docsync.util.ids import new_document_id
from docsync.util.time import now_utc
from docsync.validators import validate_upload

_LOGGER = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024
_WEEK = timedelta(days=7)
_MONTH = timedelta(days=30)


class DocumentService:
    """
    Local-first document service.

    Policy:
        - The local store is the source of truth once an operation returns.
        - Remote mirrors (upload/delete) are detached; their failures go to
          the mirror error queue, never to the caller.
        - No locking: callers serialize add/delete/force_sync on one store.

    Construct once per process (see from_config) and pass it to callers.
    """

    def __init__(
        self,
        store: LocalDocumentStore,
        gateway: RemoteGateway,
        *,
        policy: Optional[SyncPolicy] = None,
        mirror: Optional[MirrorTracker] = None,
        max_file_size: int = MAX_FILE_SIZE,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._clock = clock
        self._policy = policy or SyncPolicy(store, clock=clock)
        self._mirror = mirror or MirrorTracker(clock=clock)
        self._engine = SyncEngine(store, gateway, mirror=self._mirror, clock=clock)
        self._max_file_size = max_file_size
        self._closed = False

    @classmethod
    def from_config(cls, config: DocSyncConfig) -> "DocumentService":
        """Build the service and its collaborators from configuration."""
        backend = JsonFileBackend(config.storage_path) if config.storage_path else MemoryBackend()
        store = LocalDocumentStore(backend)
        gateway = RemoteGateway(
            config.base_url,
            auth=config.auth,
            timeout=config.request_timeout,
            list_path=config.list_path,
            upload_path=config.upload_path,
        )
        return cls(
            store,
            gateway,
            policy=SyncPolicy(store, interval=config.sync_interval_delta),
            mirror=MirrorTracker(max_errors=config.mirror_error_limit),
            max_file_size=config.max_file_size,
        )

    async def __aenter__(self) -> "DocumentService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ----------------------------
    # Read APIs
    # ----------------------------
    async def list_all(self, force_sync: bool = False) -> list[DocumentRecord]:
        """
        Return the local collection, syncing first when forced or stale.

        A failing sync is logged; the local snapshot is returned regardless.
        """
        self._ensure_open()
        try:
            if force_sync or await self._policy.is_stale():
                await self._engine.run()
        except DocSyncError as exc:
            _LOGGER.warning("Sync before listing failed; serving local snapshot: %s", exc)
        return await self._store.load()

    async def search(self, query: str) -> list[DocumentRecord]:
        """
        Case-insensitive substring search over names, description and tags.

        A blank query returns the local collection without fetching.
        """
        self._ensure_open()
        if not (query or "").strip():
            return await self._store.load()
        documents = await self.list_all()
        return [doc for doc in documents if doc.matches(query)]

    async def get(self, document_id: str) -> Optional[DocumentRecord]:
        """Return the document with `document_id`, or None."""
        self._ensure_open()
        documents = await self.list_all()
        return next((doc for doc in documents if doc.id == document_id), None)

    async def stats(self) -> StatsSnapshot:
        """Compute statistics from the current local collection."""
        self._ensure_open()
        documents = await self._store.load()
        last_sync = await self._store.read_sync_timestamp()
        now = self._clock()

        total_count = len(documents)
        total_size = sum(doc.size_bytes for doc in documents)
        return StatsSnapshot(
            total_count=total_count,
            total_size=total_size,
            average_size=total_size / total_count if total_count else 0.0,
            total_size_mb=round(total_size / _BYTES_PER_MB, 2),
            this_week=sum(1 for doc in documents if doc.uploaded_at >= now - _WEEK),
            this_month=sum(1 for doc in documents if doc.uploaded_at >= now - _MONTH),
            generated_at=now,
            last_sync=last_sync,
        )

    # ----------------------------
    # Mutating APIs
    # ----------------------------
    async def add(self, file: Optional[UploadFile], custom_name: Optional[str] = None) -> DocumentRecord:
        """
        Validate and store a new document, then mirror it in the background.

        Raises:
            ValidationError: missing/empty/oversized file or wrong extension.
            StorageError: the collection could not be saved.
        """
        self._ensure_open()
        checked = validate_upload(file, max_size=self._max_file_size)

        documents = await self._store.load()
        existing_ids = {doc.id for doc in documents}
        now = self._clock()
        doc_id = new_document_id(PDF_KIND, at=now)
        while doc_id in existing_ids:
            doc_id = new_document_id(PDF_KIND, at=now)

        name = (custom_name or "").strip() or strip_extension(checked.filename)
        record = DocumentRecord(
            id=doc_id,
            display_name=name,
            size_bytes=checked.size,
            uploaded_at=now,
            original_name=checked.filename,
            tags=tags_from_filename(checked.filename),
        )

        documents.append(record)
        await self._store.save(documents)
        _LOGGER.info("Added document %s (%s)", record.id, record.display_name)

        self._mirror.spawn("upload", record.id, self._gateway.upload(checked, record))
        return record

    async def delete(self, document_id: str) -> bool:
        """
        Remove a document locally, then delete it remotely in the background.

        Returns False (and changes nothing) when the id is unknown.
        """
        self._ensure_open()
        documents = await self._store.load()
        remaining = [doc for doc in documents if doc.id != document_id]
        if len(remaining) == len(documents):
            _LOGGER.info("Document %s not found for deletion", document_id)
            return False

        await self._store.save(remaining)
        _LOGGER.info("Deleted document %s", document_id)

        self._mirror.spawn("delete", document_id, self._gateway.remove(document_id))
        return True

    async def force_sync(self) -> SyncReport:
        """Run a reconciliation pass now. Raises StorageError on save failure."""
        self._ensure_open()
        return await self._engine.run()

    async def clear_cache(self) -> None:
        """Wipe the local collection and the last sync timestamp."""
        self._ensure_open()
        await self._store.clear()
        _LOGGER.info("Local cache cleared")

    # ----------------------------
    # Mirror side channel / lifecycle
    # ----------------------------
    def drain_mirror_errors(self) -> list[MirrorFailure]:
        return self._mirror.drain_errors()

    async def wait_for_mirrors(self) -> None:
        await self._mirror.wait_idle()

    async def close(self) -> None:
        """Let in-flight mirrors finish, then release the gateway."""
        if self._closed:
            return
        self._closed = True
        await self._mirror.wait_idle()
        await self._gateway.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidStateError("DocumentService is closed")
