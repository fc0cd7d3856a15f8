"""Data models for tracked documents and add() input."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from docsync.util.files import PDF_KIND, PDF_MIME
from docsync.util.time import EPOCH, parse_timestamp, to_timestamp


@dataclass(slots=True, frozen=True)
class DocumentRecord:
    """
    One tracked document.

    Notes:
        - `id` is the primary key, identical in local and remote representations.
        - Records that were never mirrored remotely have no download/view URL.
        - Records are replaced as a whole by reconciliation, never patched.
    """

    id: str
    display_name: str
    size_bytes: int
    uploaded_at: datetime

    original_name: Optional[str] = None
    download_url: Optional[str] = None
    view_url: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    description: Optional[str] = None
    kind: str = PDF_KIND
    mime_type: str = PDF_MIME

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape used by the local store."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "originalName": self.original_name,
            "sizeBytes": self.size_bytes,
            "uploadedAt": to_timestamp(self.uploaded_at),
            "downloadUrl": self.download_url,
            "viewUrl": self.view_url,
            "tags": list(self.tags),
            "description": self.description,
            "kind": self.kind,
            "mimeType": self.mime_type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentRecord:
        """
        Deserialize from the local store JSON shape.

        A missing or unparsable `uploadedAt` defaults to EPOCH.

        Raises:
            ValueError: if required fields are missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("document entry must be an object")

        doc_id = data.get("id")
        if not isinstance(doc_id, str) or not doc_id:
            raise ValueError("document entry has no id")

        name = data.get("displayName")
        if not isinstance(name, str):
            raise ValueError(f"document {doc_id} has no displayName")

        size = data.get("sizeBytes", 0)
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            raise ValueError(f"document {doc_id} has an invalid sizeBytes")

        tags = data.get("tags") or []
        if not isinstance(tags, list):
            raise ValueError(f"document {doc_id} has invalid tags")

        return cls(
            id=doc_id,
            display_name=name,
            size_bytes=size,
            uploaded_at=_stored_timestamp(data.get("uploadedAt")),
            original_name=_opt_str(data.get("originalName")),
            download_url=_opt_str(data.get("downloadUrl")),
            view_url=_opt_str(data.get("viewUrl")),
            tags=[str(t) for t in tags],
            description=_opt_str(data.get("description")),
            kind=_opt_str(data.get("kind")) or PDF_KIND,
            mime_type=_opt_str(data.get("mimeType")) or PDF_MIME,
        )

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match over names, description and tags."""
        needle = needle.lower()
        haystack = [self.display_name, self.original_name, self.description, *self.tags]
        return any(needle in value.lower() for value in haystack if value)


@dataclass(slots=True, frozen=True)
class UploadFile:
    """
    A file handed to DocumentService.add().

    Either `content` (in-memory bytes) or `path` (on disk) carries the payload.
    `size` is authoritative for validation.
    """

    filename: str
    size: int
    content: Optional[bytes] = None
    path: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> UploadFile:
        return cls(
            filename=os.path.basename(path),
            size=os.path.getsize(path),
            path=path,
        )

    @classmethod
    def from_bytes(cls, filename: str, content: bytes) -> UploadFile:
        return cls(filename=filename, size=len(content), content=content)

    def read_bytes(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError(f"{self.filename} has neither content nor path")
        with open(self.path, "rb") as f:
            return f.read()


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _stored_timestamp(value: Any) -> datetime:
    # Unknown upload time sorts oldest, so any remote copy wins.
    if isinstance(value, str) and value:
        try:
            return parse_timestamp(value)
        except ValueError:
            pass
    return EPOCH
