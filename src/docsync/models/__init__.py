"""Public model exports for docsync."""

from __future__ import annotations

from .document import DocumentRecord, UploadFile
from .results import MirrorAction, MirrorFailure, StatsSnapshot, SyncReport

__all__ = [
    "DocumentRecord",
    "UploadFile",
    "SyncReport",
    "StatsSnapshot",
    "MirrorAction",
    "MirrorFailure",
]
