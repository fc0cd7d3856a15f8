import dataclasses
import os
import tempfile
import unittest
from datetime import datetime, timezone

from docsync.models import DocumentRecord, UploadFile
from docsync.util.time import EPOCH


def _record(**overrides) -> DocumentRecord:
    base = dict(
        id="pdf_1",
        display_name="Facture EDF",
        size_bytes=123,
        uploaded_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        original_name="facture_edf.pdf",
        tags=["Facture", "date"],
        description="Electricity bill",
    )
    base.update(overrides)
    return DocumentRecord(**base)


class TestDocumentRecord(unittest.TestCase):
    def test_defaults(self) -> None:
        rec = DocumentRecord(
            id="x",
            display_name="x",
            size_bytes=0,
            uploaded_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        self.assertEqual(rec.kind, "pdf")
        self.assertEqual(rec.mime_type, "application/pdf")
        self.assertEqual(rec.tags, [])
        self.assertIsNone(rec.download_url)
        self.assertIsNone(rec.view_url)

    def test_is_frozen(self) -> None:
        rec = _record()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            rec.display_name = "patched"  # type: ignore[misc]

    def test_to_dict_shape(self) -> None:
        data = _record().to_dict()
        self.assertEqual(data["id"], "pdf_1")
        self.assertEqual(data["displayName"], "Facture EDF")
        self.assertEqual(data["sizeBytes"], 123)
        self.assertEqual(data["uploadedAt"], "2025-01-01T00:00:00.000Z")
        self.assertEqual(data["mimeType"], "application/pdf")

    def test_from_dict_restores_record(self) -> None:
        rec = _record(download_url="https://x/y.pdf")
        self.assertEqual(DocumentRecord.from_dict(rec.to_dict()), rec)

    def test_from_dict_rejects_missing_id(self) -> None:
        data = _record().to_dict()
        del data["id"]
        with self.assertRaises(ValueError):
            DocumentRecord.from_dict(data)

    def test_from_dict_rejects_negative_size(self) -> None:
        data = _record().to_dict()
        data["sizeBytes"] = -1
        with self.assertRaises(ValueError):
            DocumentRecord.from_dict(data)

    def test_from_dict_defaults_unknown_timestamp_to_epoch(self) -> None:
        data = _record().to_dict()
        data["uploadedAt"] = "not a date"
        self.assertEqual(DocumentRecord.from_dict(data).uploaded_at, EPOCH)

        del data["uploadedAt"]
        rec = DocumentRecord.from_dict(data)
        self.assertEqual(rec.id, "pdf_1")
        self.assertEqual(rec.uploaded_at, EPOCH)

    def test_matches_is_case_insensitive_substring(self) -> None:
        rec = _record()
        self.assertTrue(rec.matches("fact"))
        self.assertTrue(rec.matches("EDF"))
        self.assertTrue(rec.matches("electricity"))
        self.assertTrue(rec.matches("_edf.p"))
        self.assertFalse(rec.matches("contrat"))


class TestUploadFile(unittest.TestCase):
    def test_from_bytes(self) -> None:
        f = UploadFile.from_bytes("a.pdf", b"%PDF-1.4")
        self.assertEqual(f.size, 8)
        self.assertEqual(f.read_bytes(), b"%PDF-1.4")

    def test_from_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "doc.pdf")
            with open(path, "wb") as fh:
                fh.write(b"x" * 10)
            f = UploadFile.from_path(path)
            self.assertEqual(f.filename, "doc.pdf")
            self.assertEqual(f.size, 10)
            self.assertEqual(f.read_bytes(), b"x" * 10)

    def test_read_bytes_without_payload(self) -> None:
        with self.assertRaises(ValueError):
            UploadFile(filename="a.pdf", size=1).read_bytes()


if __name__ == "__main__":
    unittest.main()
