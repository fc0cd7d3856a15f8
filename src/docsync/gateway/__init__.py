"""Remote gateway exports for docsync."""

from __future__ import annotations

from .remote_gateway import (
    RemoteGateway,
    RemoteListing,
    decode_listing,
    decode_remote_item,
    upload_form_fields,
)

__all__ = [
    "RemoteGateway",
    "RemoteListing",
    "decode_listing",
    "decode_remote_item",
    "upload_form_fields",
]
