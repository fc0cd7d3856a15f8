"""Remote document API gateway (aiohttp)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

import aiohttp

from docsync.auth import AuthHeaderProvider, AuthInfo
from docsync.errors import (
    EndpointUnavailableError,
    HttpErrorInfo,
    NetworkError,
    RemoteApiError,
    TransientRemoteError,
    map_http_error,
)
from docsync.models import DocumentRecord, UploadFile
from docsync.util.files import PDF_EXTENSION
from docsync.util.time import EPOCH, parse_timestamp

from .fields import (
    DEFAULT_LIST_PATH,
    DEFAULT_UPLOAD_PATH,
    DESCRIPTION_KEYS,
    DOWNLOAD_URL_KEYS,
    FILENAME_KEYS,
    ID_KEYS,
    LISTING_WRAPPER_KEYS,
    MARKER_ID,
    MARKER_STATUS,
    MARKER_TYPE,
    MAX_UPLOAD_TAGS,
    NAME_KEYS,
    ORIGINAL_NAME_KEYS,
    SHORT_TAG_KEYS,
    SIZE_KEYS,
    TAG_LIST_KEY,
    TAG_SLOT_KEYS,
    UPLOAD_DESCRIPTION_FIELD,
    UPLOAD_FILE_FIELD,
    UPLOAD_ID_FIELD,
    UPLOAD_NAME_FIELD,
    UPLOADED_AT_KEYS,
    VIEW_URL_KEYS,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC: float = 10.0


@dataclass(frozen=True)
class RemoteListing:
    """Decoded remote listing; `error` is set when the listing was degraded."""

    documents: list[DocumentRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


class RemoteGateway:
    """
    Gateway to the remote document API.

    Notes:
        - Listing never raises; failures collapse to an empty listing.
        - upload/remove raise TransientRemoteError; callers run them as
          best-effort background mirrors.
        - No retries here. Each call is bounded by `timeout`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        auth: Optional[AuthInfo] = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        list_path: str = DEFAULT_LIST_PATH,
        upload_path: str = DEFAULT_UPLOAD_PATH,
    ) -> None:
        if not base_url or not isinstance(base_url, str):
            raise ValueError("base_url must be a non-empty string")
        self._base_url = base_url.rstrip("/")
        self._list_path = list_path
        self._upload_path = upload_path
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._auth = AuthHeaderProvider(auth)
        self._session = session
        self._owns_session = session is None

    @property
    def list_url(self) -> str:
        return f"{self._base_url}{self._list_path}"

    @property
    def upload_url(self) -> str:
        return f"{self._base_url}{self._upload_path}"

    def document_url(self, document_id: str) -> str:
        return f"{self.list_url}/{document_id}"

    # ----------------------------
    # Public API
    # ----------------------------
    async def list_documents(self) -> list[DocumentRecord]:
        """Return the remote listing, or [] when it is unavailable."""
        listing = await self.fetch_listing()
        return listing.documents

    async def fetch_listing(self) -> RemoteListing:
        """
        Fetch and decode the remote listing, keeping the degradation reason.

        404 means the endpoint does not exist (local-only mode) and is not an
        error. Every other failure yields an empty, degraded listing.
        """
        url = self.list_url
        try:
            payload = await self._request("GET", url, want_json=True)
        except EndpointUnavailableError:
            _LOGGER.info("Listing endpoint %s not available; local-only mode", url)
            return RemoteListing()
        except TransientRemoteError as exc:
            _LOGGER.warning("Remote listing failed (%s): %s", exc.__class__.__name__, exc)
            return RemoteListing(error=f"remote listing failed: {exc}")

        listing = decode_listing(payload)
        _LOGGER.debug("Remote listing returned %d document(s)", len(listing.documents))
        return listing

    async def upload(self, file: UploadFile, record: DocumentRecord) -> None:
        """
        Upload `file` as multipart form data under `record.id`.

        Raises:
            TransientRemoteError: on any failure other than a missing endpoint.
        """
        try:
            content = await asyncio.to_thread(file.read_bytes)
        except (OSError, ValueError) as exc:
            raise RemoteApiError(
                "Could not read file for upload",
                details={"filename": file.filename},
                cause=exc,
            ) from exc

        form = aiohttp.FormData()
        form.add_field(
            UPLOAD_FILE_FIELD,
            content,
            filename=file.filename,
            content_type=record.mime_type,
        )
        for name, value in upload_form_fields(record):
            form.add_field(name, value)

        try:
            await self._request("POST", self.upload_url, data=form)
        except EndpointUnavailableError:
            _LOGGER.info("Upload endpoint not available; %s stays local only", record.id)
            return
        _LOGGER.debug("Uploaded %s (%d bytes)", record.id, len(content))

    async def remove(self, document_id: str) -> None:
        """
        Delete a remote document.

        Raises:
            TransientRemoteError: on non-2xx (other than 404) or transport errors.
        """
        try:
            await self._request("DELETE", self.document_url(document_id))
        except EndpointUnavailableError:
            _LOGGER.info("Remote document %s not found; nothing to delete", document_id)
            return
        _LOGGER.debug("Deleted remote document %s", document_id)

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    # ----------------------------
    # Internals
    # ----------------------------
    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _headers(self) -> dict[str, str]:
        if self._auth.is_blocking:
            return await asyncio.to_thread(self._auth.headers)
        return self._auth.headers()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        want_json: bool = False,
        **kwargs: Any,
    ) -> Any:
        headers = {"Accept": "application/json"}
        headers.update(await self._headers())
        session = self._ensure_session()

        _LOGGER.debug("%s %s", method, url)
        try:
            async with session.request(
                method,
                url,
                headers=headers,
                timeout=self._timeout,
                **kwargs,
            ) as resp:
                if not 200 <= resp.status < 300:
                    reason = getattr(resp, "reason", None)
                    raise map_http_error(
                        HttpErrorInfo(
                            status_code=resp.status,
                            reason=reason if isinstance(reason, str) else None,
                            message=f"{method} {url} returned HTTP {resp.status}",
                        )
                    )
                if not want_json:
                    return None
                try:
                    return await resp.json(content_type=None)
                except (aiohttp.ContentTypeError, ValueError) as err:
                    raise RemoteApiError(
                        "Malformed JSON payload",
                        details={"url": url},
                        cause=err,
                    ) from err
        except (asyncio.TimeoutError, aiohttp.ClientError) as err:
            raise NetworkError(
                str(err) or err.__class__.__name__,
                details={"url": url, "method": method},
                cause=err,
            ) from err


def upload_form_fields(record: DocumentRecord) -> list[tuple[str, str]]:
    """Non-file multipart fields for an upload: id, name, tag1..3, description."""
    fields = [(UPLOAD_ID_FIELD, record.id), (UPLOAD_NAME_FIELD, record.display_name)]
    tags = [t for t in record.tags if t][:MAX_UPLOAD_TAGS]
    fields.extend(zip(TAG_SLOT_KEYS, tags))
    if record.description:
        fields.append((UPLOAD_DESCRIPTION_FIELD, record.description))
    return fields


def is_marker_item(item: Any) -> bool:
    """True for the server's informational 'access filtered' record."""
    if not isinstance(item, dict):
        return False
    return (
        item.get("id") == MARKER_ID
        or item.get("type") == MARKER_TYPE
        or item.get("status") == MARKER_STATUS
    )


def decode_listing(payload: Any) -> RemoteListing:
    """Decode a raw listing payload into records; never raises."""
    if isinstance(payload, dict):
        for key in LISTING_WRAPPER_KEYS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break

    if not isinstance(payload, list):
        _LOGGER.warning("Remote listing is not a list (%s)", type(payload).__name__)
        return RemoteListing(error="remote listing payload is not a list")

    if any(is_marker_item(item) for item in payload):
        _LOGGER.warning("Remote listing reports access filtering; treating as empty")
        return RemoteListing(error="remote listing access filtered")

    documents: list[DocumentRecord] = []
    for item in payload:
        record = decode_remote_item(item)
        if record is not None:
            documents.append(record)
    return RemoteListing(documents=documents)


def decode_remote_item(item: Any) -> Optional[DocumentRecord]:
    """
    Map one upstream listing item to a DocumentRecord.

    Items without an id are skipped (None). Display name chain:
    description -> short tag -> originalName -> name -> filename -> `<id>.pdf`.
    """
    if not isinstance(item, dict):
        _LOGGER.warning("Skipping remote item of type %s", type(item).__name__)
        return None

    doc_id = _first_str(item, ID_KEYS)
    if doc_id is None:
        _LOGGER.warning("Skipping remote item without id (keys: %s)", sorted(item))
        return None

    tags = _decode_tags(item)
    original_name = _first_str(item, ORIGINAL_NAME_KEYS)
    description = _first_str(item, DESCRIPTION_KEYS)
    short_tag = _first_str(item, SHORT_TAG_KEYS) or (tags[0] if tags else None)

    display_name = (
        description
        or short_tag
        or original_name
        or _first_str(item, NAME_KEYS)
        or _first_str(item, FILENAME_KEYS)
        or f"{doc_id}{PDF_EXTENSION}"
    )

    return DocumentRecord(
        id=doc_id,
        display_name=display_name,
        size_bytes=_decode_size(item),
        uploaded_at=_decode_uploaded_at(item, doc_id),
        original_name=original_name or _first_str(item, FILENAME_KEYS),
        download_url=_first_str(item, DOWNLOAD_URL_KEYS),
        view_url=_first_str(item, VIEW_URL_KEYS),
        tags=tags,
        description=description,
    )


def _first_str(item: dict[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, int) and not isinstance(value, bool) and key in ID_KEYS:
            return str(value)
    return None


def _decode_tags(item: dict[str, Any]) -> list[str]:
    raw = item.get(TAG_LIST_KEY)
    if isinstance(raw, list):
        return [t.strip() for t in raw if isinstance(t, str) and t.strip()]
    return [s for s in (_first_str(item, (k,)) for k in TAG_SLOT_KEYS) if s]


def _decode_size(item: dict[str, Any]) -> int:
    for key in SIZE_KEYS:
        value = item.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return max(value, 0)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
    return 0


def _decode_uploaded_at(item: dict[str, Any], doc_id: str) -> datetime:
    raw = _first_str(item, UPLOADED_AT_KEYS)
    if raw is None:
        return EPOCH
    try:
        return parse_timestamp(raw)
    except ValueError:
        _LOGGER.debug("Unparsable timestamp %r on remote item %s", raw, doc_id)
        return EPOCH
