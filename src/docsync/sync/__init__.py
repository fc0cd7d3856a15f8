"""Sync exports for docsync."""

from __future__ import annotations

from .engine import SyncEngine
from .policy import DEFAULT_SYNC_INTERVAL, SyncPolicy
from .reconcile import MergeOutcome, reconcile

__all__ = [
    "SyncEngine",
    "SyncPolicy",
    "DEFAULT_SYNC_INTERVAL",
    "MergeOutcome",
    "reconcile",
]
