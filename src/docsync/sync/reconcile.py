"""Merge a local and a remote document collection (no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from docsync.models import DocumentRecord


@dataclass(slots=True, frozen=True)
class MergeOutcome:
    """Canonical collection produced by reconcile() plus change counts."""

    documents: list[DocumentRecord] = field(default_factory=list)
    new_documents: int = 0
    updated_documents: int = 0
    # Reserved for a stricter mode with tombstones; always 0.
    deleted_documents: int = 0


def reconcile(
    local: Sequence[DocumentRecord],
    remote: Sequence[DocumentRecord],
) -> MergeOutcome:
    """
    Merge `remote` into `local`.

    Rules:
        - Remote-only record: taken (new).
        - Remote strictly newer (`uploaded_at`): remote replaces local (updated).
        - Equal timestamps or local newer: local kept.
        - Local-only record: kept. Absence from the remote listing never
          deletes anything.

    Output order: remote-matched records in remote order, then local-only
    records in local order. Ids are unique in the output; a duplicated remote
    id keeps its first occurrence.
    """
    local_by_id: dict[str, DocumentRecord] = {}
    for doc in local:
        local_by_id.setdefault(doc.id, doc)

    merged: list[DocumentRecord] = []
    emitted: set[str] = set()
    new_documents = 0
    updated_documents = 0

    for remote_doc in remote:
        if remote_doc.id in emitted:
            continue

        local_doc = local_by_id.pop(remote_doc.id, None)
        if local_doc is None:
            merged.append(remote_doc)
            new_documents += 1
        elif remote_doc.uploaded_at > local_doc.uploaded_at:
            merged.append(remote_doc)
            updated_documents += 1
        else:
            merged.append(local_doc)
        emitted.add(remote_doc.id)

    merged.extend(local_by_id.values())

    return MergeOutcome(
        documents=merged,
        new_documents=new_documents,
        updated_documents=updated_documents,
    )
