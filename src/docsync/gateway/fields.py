"""Field names for the remote document API."""

from __future__ import annotations

DEFAULT_LIST_PATH: str = "/documents"
DEFAULT_UPLOAD_PATH: str = "/documents/upload"

# Listing items: first non-empty key wins.
ID_KEYS: tuple[str, ...] = ("id", "idExterne")
DESCRIPTION_KEYS: tuple[str, ...] = ("description",)
SHORT_TAG_KEYS: tuple[str, ...] = ("shortTag",)
ORIGINAL_NAME_KEYS: tuple[str, ...] = ("originalName", "original_name", "originalFilename")
NAME_KEYS: tuple[str, ...] = ("name",)
FILENAME_KEYS: tuple[str, ...] = ("fileName", "filename")
SIZE_KEYS: tuple[str, ...] = ("sizeBytes", "size", "fileSize")
UPLOADED_AT_KEYS: tuple[str, ...] = ("uploadedAt", "uploaded_at", "createdAt")
DOWNLOAD_URL_KEYS: tuple[str, ...] = ("downloadUrl", "url")
VIEW_URL_KEYS: tuple[str, ...] = ("viewUrl",)
TAG_LIST_KEY: str = "tags"
TAG_SLOT_KEYS: tuple[str, ...] = ("tag1", "tag2", "tag3")

# Wrapped listings ({"documents": [...]}) are unwrapped through these keys.
LISTING_WRAPPER_KEYS: tuple[str, ...] = ("documents", "items", "files")

# Informational record the server emits instead of data when filtered.
MARKER_ID: str = "ip-filtered-info"
MARKER_TYPE: str = "info"
MARKER_STATUS: str = "ip_filtered"

# Multipart upload form.
UPLOAD_FILE_FIELD: str = "file"
UPLOAD_ID_FIELD: str = "idExterne"
UPLOAD_NAME_FIELD: str = "name"
UPLOAD_DESCRIPTION_FIELD: str = "description"
MAX_UPLOAD_TAGS: int = len(TAG_SLOT_KEYS)
