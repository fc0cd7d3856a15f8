import asyncio
import unittest
from datetime import datetime, timezone

from docsync.mirror import MirrorTracker

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestMirrorTracker(unittest.IsolatedAsyncioTestCase):
    async def test_success_records_nothing(self) -> None:
        done = asyncio.Event()

        async def ok() -> None:
            done.set()

        tracker = MirrorTracker()
        tracker.spawn("upload", "a", ok())
        await tracker.wait_idle()

        self.assertTrue(done.is_set())
        self.assertEqual(tracker.pending, 0)
        self.assertEqual(tracker.drain_errors(), [])

    async def test_spawn_does_not_block_caller(self) -> None:
        gate = asyncio.Event()

        async def slow() -> None:
            await gate.wait()

        tracker = MirrorTracker()
        tracker.spawn("delete", "a", slow())
        self.assertEqual(tracker.pending, 1)

        gate.set()
        await tracker.wait_idle()
        self.assertEqual(tracker.pending, 0)

    async def test_failure_is_queued_and_drained_once(self) -> None:
        async def boom() -> None:
            raise ConnectionError("offline")

        tracker = MirrorTracker(clock=lambda: T0)
        with self.assertLogs("docsync.mirror", level="WARNING"):
            tracker.spawn("delete", "pdf_9", boom())
            await tracker.wait_idle()

        failures = tracker.drain_errors()
        self.assertEqual(len(failures), 1)
        self.assertEqual(failures[0].action, "delete")
        self.assertEqual(failures[0].document_id, "pdf_9")
        self.assertEqual(failures[0].error_type, "ConnectionError")
        self.assertEqual(failures[0].occurred_at, T0)
        self.assertEqual(tracker.drain_errors(), [])

    async def test_queue_is_bounded(self) -> None:
        async def boom() -> None:
            raise RuntimeError("x")

        tracker = MirrorTracker(max_errors=2)
        for i in range(5):
            tracker.spawn("upload", f"d{i}", boom())
        await tracker.wait_idle()

        self.assertEqual([f.document_id for f in tracker.drain_errors()], ["d3", "d4"])

    def test_max_errors_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            MirrorTracker(max_errors=0)


if __name__ == "__main__":
    unittest.main()
