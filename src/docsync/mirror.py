"""Fire-and-forget remote mirrors with a bounded failure queue."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from datetime import datetime
from typing import Awaitable, Callable

from docsync.models import MirrorAction, MirrorFailure
from docsync.util.time import now_utc

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ERRORS: int = 100


class MirrorTracker:
    """
    Runs background mirror calls as detached tasks.

    A failed mirror never raises into its caller; it is logged and recorded as
    a MirrorFailure. The queue keeps the most recent `max_errors` failures.
    """

    def __init__(
        self,
        *,
        max_errors: int = DEFAULT_MAX_ERRORS,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        if max_errors < 1:
            raise ValueError("max_errors must be >= 1")
        self._tasks: set[asyncio.Task[None]] = set()
        self._errors: deque[MirrorFailure] = deque(maxlen=max_errors)
        self._clock = clock

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(
        self,
        action: MirrorAction,
        document_id: str,
        call: Awaitable[None],
    ) -> asyncio.Task[None]:
        """Schedule `call` without awaiting it. Requires a running loop."""
        task = asyncio.create_task(
            self._run(action, document_id, call),
            name=f"docsync-{action}-{document_id}",
        )
        # The loop only keeps weak references to tasks.
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def drain_errors(self) -> list[MirrorFailure]:
        """Return and forget the recorded failures, oldest first."""
        drained = list(self._errors)
        self._errors.clear()
        return drained

    async def wait_idle(self) -> None:
        """Wait until every in-flight mirror finished (successfully or not)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _run(self, action: MirrorAction, document_id: str, call: Awaitable[None]) -> None:
        try:
            await call
        except Exception as exc:
            _LOGGER.warning("Background %s of %s failed: %s", action, document_id, exc)
            self._errors.append(
                MirrorFailure(
                    action=action,
                    document_id=document_id,
                    error_type=exc.__class__.__name__,
                    message=str(exc),
                    occurred_at=self._clock(),
                )
            )
