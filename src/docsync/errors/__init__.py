"""Public error exports for docsync."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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
