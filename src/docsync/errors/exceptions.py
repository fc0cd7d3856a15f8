"""Exception hierarchy and HTTP error mapping for docsync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DocSyncError(Exception):
    """
    Base exception for docsync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, rule).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ValidationError(DocSyncError):
    """
    Raised when input to `add` is rejected.

    `details["rule"]` names the failed rule: missing, empty, too_large, extension.
    """

    def __init__(
        self,
        message: str,
        *,
        rule: str,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        merged = {"rule": rule}
        if details:
            merged.update(details)
        super().__init__(message, details=merged, cause=cause)

    @property
    def rule(self) -> str:
        return str(self.details["rule"])


class StorageError(DocSyncError):
    """Raised when local persistence cannot be read or written."""


class InvalidStateError(DocSyncError):
    """Raised when the service is used in an invalid state (e.g., after close)."""


class TransientRemoteError(DocSyncError):
    """Raised for any network/HTTP failure talking to the remote store."""


class NetworkError(TransientRemoteError):
    """Raised when network/timeout issues prevent the request."""


class AuthError(TransientRemoteError):
    """Raised when auth headers cannot be obtained or the remote answers 401."""


class AccessFilteredError(TransientRemoteError):
    """Raised on HTTP 403 (edge/IP filtering in front of the remote store)."""


class EndpointUnavailableError(TransientRemoteError):
    """Raised on HTTP 404 (the remote endpoint does not exist)."""


class RemoteApiError(TransientRemoteError):
    """Raised for unclassified remote errors (5xx, unknown 4xx, bad payloads)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to docsync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> TransientRemoteError:
    """
    Map an HTTP error status to a docsync exception.

    Policy:
        - 401 -> AuthError
        - 403 -> AccessFilteredError
        - 404 -> EndpointUnavailableError
        - otherwise -> RemoteApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        return AccessFilteredError(message, details=details, cause=cause)
    if info.status_code == 404:
        return EndpointUnavailableError(message, details=details, cause=cause)

    return RemoteApiError(message, details=details, cause=cause)
