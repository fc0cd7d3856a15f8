from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from .time import epoch_millis, now_utc


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_document_id(kind: str = "pdf", *, at: Optional[datetime] = None) -> str:
    """
    Generate a document id: `<kind>_<epoch millis>_<9 hex chars>`.

    The random suffix keeps ids unique for adds within the same millisecond.
    """
    millis = epoch_millis(at or now_utc())
    return f"{kind}_{millis}_{uuid.uuid4().hex[:9]}"
