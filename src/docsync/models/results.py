"""Result models for sync passes, stats and background mirrors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional


MirrorAction = Literal["upload", "delete"]


@dataclass(slots=True, frozen=True)
class SyncReport:
    """
    Outcome of one reconciliation pass.

    `deleted_documents` is always 0: a record missing from the remote listing
    is never removed locally.
    """

    success: bool
    local_count: int
    remote_count: int
    new_documents: int = 0
    updated_documents: int = 0
    deleted_documents: int = 0
    errors: tuple[str, ...] = ()

    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class StatsSnapshot:
    """Statistics derived from the current local collection."""

    total_count: int
    total_size: int
    average_size: float
    total_size_mb: float
    this_week: int
    this_month: int
    generated_at: datetime
    last_sync: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class MirrorFailure:
    """A failed background upload/delete, reported through the error queue."""

    action: MirrorAction
    document_id: str
    error_type: str
    message: str
    occurred_at: datetime = field(compare=False)

    def describe(self) -> str:
        return f"{self.action} {self.document_id} failed: {self.error_type}: {self.message}"
