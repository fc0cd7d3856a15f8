"""docsync public API."""

from __future__ import annotations

from docsync.auth import AuthInfo, OAuthClient
from docsync.config import DocSyncConfig
from docsync.errors import (
    AccessFilteredError,
    AuthError,
    DocSyncError,
    EndpointUnavailableError,
    HttpErrorInfo,
    InvalidStateError,
    NetworkError,
    RemoteApiError,
    StorageError,
    TransientRemoteError,
    ValidationError,
    map_http_error,
)
from docsync.gateway import RemoteGateway, RemoteListing
from docsync.mirror import MirrorTracker
from docsync.models import DocumentRecord, MirrorFailure, StatsSnapshot, SyncReport, UploadFile
from docsync.service import DocumentService
from docsync.store import JsonFileBackend, KeyValueBackend, LocalDocumentStore, MemoryBackend
from docsync.sync import MergeOutcome, SyncEngine, SyncPolicy, reconcile

__all__ = [
    # High-level
    "DocumentService",
    "DocSyncConfig",
    # Components
    "LocalDocumentStore",
    "KeyValueBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "RemoteGateway",
    "RemoteListing",
    "SyncEngine",
    "SyncPolicy",
    "MirrorTracker",
    "MergeOutcome",
    "reconcile",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Models
    "DocumentRecord",
    "UploadFile",
    "SyncReport",
    "StatsSnapshot",
    "MirrorFailure",
    # Errors
    "DocSyncError",
    "ValidationError",
    "StorageError",
    "InvalidStateError",
    "TransientRemoteError",
    "NetworkError",
    "AuthError",
    "AccessFilteredError",
    "EndpointUnavailableError",
    "RemoteApiError",
    "HttpErrorInfo",
    "map_http_error",
]
