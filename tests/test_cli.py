import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from docsync.auth import OAuthClient
from docsync.cli import EXIT_ERROR, EXIT_INVALID, EXIT_OK, main
from docsync.config import DocSyncConfig
from docsync.gateway import RemoteListing


class FakeGateway:
    def __init__(self) -> None:
        self.uploads: list[str] = []

    async def fetch_listing(self) -> RemoteListing:
        return RemoteListing()

    async def upload(self, file, record) -> None:
        self.uploads.append(record.id)

    async def remove(self, document_id: str) -> None:
        pass

    async def close(self) -> None:
        pass


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config = DocSyncConfig.from_mapping(
            {"storage_path": os.path.join(self._tmp.name, "store.json")}
        )
        self.gateway = FakeGateway()
        patcher = patch("docsync.service.RemoteGateway", return_value=self.gateway)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv), config=self.config)
        return code, out.getvalue(), err.getvalue()

    def _pdf(self, name: str, content: bytes = b"%PDF-1.4") -> str:
        path = os.path.join(self._tmp.name, name)
        with open(path, "wb") as f:
            f.write(content)
        return path

    def test_add_then_list_and_stats(self) -> None:
        code, out, _ = self._run("add", self._pdf("contrat.pdf"), "--name", "Bail")
        self.assertEqual(code, EXIT_OK)
        added = json.loads(out)
        self.assertEqual(added["displayName"], "Bail")
        self.assertEqual(added["tags"], ["contrat"])
        self.assertEqual(self.gateway.uploads, [added["id"]])

        code, out, _ = self._run("list")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual([d["id"] for d in json.loads(out)], [added["id"]])

        code, out, _ = self._run("stats")
        self.assertEqual(json.loads(out)["total_count"], 1)

    def test_add_invalid_file_exits_2(self) -> None:
        code, _, err = self._run("add", self._pdf("empty.pdf", b""))
        self.assertEqual(code, EXIT_INVALID)
        self.assertIn("(empty)", err)

        code, _, err = self._run("add", os.path.join(self._tmp.name, "nope.pdf"))
        self.assertEqual(code, EXIT_INVALID)
        self.assertIn("(missing)", err)

    def test_delete_unknown(self) -> None:
        code, out, _ = self._run("delete", "pdf_0_missing")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(json.loads(out), {"deleted": False})

    def test_login_runs_oauth_flow_from_flags(self) -> None:
        secrets = os.path.join(self._tmp.name, "client.json")
        token_file = os.path.join(self._tmp.name, "token.json")
        out, err = io.StringIO(), io.StringIO()

        with patch.dict(os.environ, {}, clear=True), patch.object(
            OAuthClient, "get_credentials", return_value=object()
        ) as get_creds, redirect_stdout(out), redirect_stderr(err):
            code = main(
                [
                    "--oauth-client-secrets",
                    secrets,
                    "--oauth-token-file",
                    token_file,
                    "login",
                ]
            )

        self.assertEqual(code, EXIT_OK)
        get_creds.assert_called_once_with()
        self.assertEqual(json.loads(out.getvalue()), {"authorized": True, "token_file": token_file})

    def test_login_without_oauth_settings_fails(self) -> None:
        code, _, err = self._run("login")
        self.assertEqual(code, EXIT_ERROR)
        self.assertIn("--oauth-client-secrets", err)

    def test_sync_and_clear(self) -> None:
        code, out, _ = self._run("sync")
        self.assertEqual(code, EXIT_OK)
        report = json.loads(out)
        self.assertTrue(report["success"])
        self.assertEqual(report["errors"], [])

        code, out, _ = self._run("clear")
        self.assertEqual(json.loads(out), {"cleared": True})


if __name__ == "__main__":
    unittest.main()
