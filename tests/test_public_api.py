import unittest

import docsync


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(docsync, "DocumentService"))
        self.assertTrue(hasattr(docsync, "DocSyncConfig"))
        self.assertTrue(hasattr(docsync, "LocalDocumentStore"))
        self.assertTrue(hasattr(docsync, "RemoteGateway"))
        self.assertTrue(hasattr(docsync, "SyncEngine"))
        self.assertTrue(hasattr(docsync, "AuthInfo"))
        self.assertTrue(hasattr(docsync, "OAuthClient"))

        self.assertTrue(hasattr(docsync, "DocumentRecord"))
        self.assertTrue(hasattr(docsync, "SyncReport"))
        self.assertTrue(hasattr(docsync, "StatsSnapshot"))
        self.assertTrue(hasattr(docsync, "UploadFile"))

        self.assertTrue(hasattr(docsync, "DocSyncError"))
        self.assertTrue(hasattr(docsync, "ValidationError"))
        self.assertTrue(hasattr(docsync, "InvalidStateError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(docsync, "__all__"))
        self.assertIn("DocumentService", docsync.__all__)
        self.assertIn("DocSyncError", docsync.__all__)
        for name in docsync.__all__:
            self.assertTrue(hasattr(docsync, name), name)


if __name__ == "__main__":
    unittest.main()
