import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from docsync.auth import AuthHeaderProvider, AuthInfo, OAuthClient
from docsync.errors import AuthError

SCOPES = ["https://www.googleapis.com/auth/userinfo.email"]


def _write_token(tmp_path: Path) -> Path:
    token_file = tmp_path / "token.json"
    token_payload = {
        "token": "fake-token",
        "refresh_token": "fake-refresh-token",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_id": "fake-client-id",
        "client_secret": "fake-client-secret",
        "scopes": SCOPES,
        "type": "authorized_user",
    }
    token_file.write_text(json.dumps(token_payload), encoding="utf-8")
    return token_file


class TestOAuthClient(unittest.TestCase):
    def test_get_credentials_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = _write_token(tmp_path)

            info = AuthInfo(
                kind="oauth",
                data={
                    "client_secrets_file": str(tmp_path / "client_secrets.json"),
                    "token_file": str(token_file),
                    "scopes": SCOPES,
                },
            )
            client = OAuthClient(info)
            creds = client.get_credentials(ensure_valid=False)

            self.assertTrue(hasattr(creds, "refresh_token"))
            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_broken_token_file_raises_auth_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            token_file = Path(tmp) / "token.json"
            token_file.write_text("{not json", encoding="utf-8")
            info = AuthInfo(
                kind="oauth",
                data={"client_secrets_file": "missing.json", "token_file": str(token_file)},
            )
            with self.assertRaises(AuthError):
                OAuthClient(info).get_credentials(ensure_valid=False)

    def test_authorization_headers_apply_cached_credentials(self) -> None:
        info = AuthInfo(kind="oauth", data={"client_secrets_file": "c", "token_file": "t"})
        client = OAuthClient(info)

        creds = MagicMock()
        creds.valid = True
        creds.apply.side_effect = lambda headers: headers.update(
            {"authorization": "Bearer abc"}
        )

        with patch.object(client, "get_credentials", return_value=creds) as get_creds:
            self.assertEqual(client.authorization_headers(), {"authorization": "Bearer abc"})
            self.assertEqual(client.authorization_headers(), {"authorization": "Bearer abc"})
            get_creds.assert_called_once()

    def test_requires_oauth_kind(self) -> None:
        with self.assertRaises(ValueError):
            OAuthClient(AuthInfo.bearer("t"))


class TestAuthHeaderProvider(unittest.TestCase):
    def test_no_auth_means_no_headers(self) -> None:
        provider = AuthHeaderProvider(None)
        self.assertEqual(provider.headers(), {})
        self.assertFalse(provider.is_blocking)

    def test_bearer_headers(self) -> None:
        provider = AuthHeaderProvider(AuthInfo.bearer("tok"))
        self.assertEqual(provider.headers(), {"Authorization": "Bearer tok"})
        self.assertFalse(provider.is_blocking)

    def test_oauth_provider_is_blocking(self) -> None:
        info = AuthInfo(kind="oauth", data={"client_secrets_file": "c", "token_file": "t"})
        self.assertTrue(AuthHeaderProvider(info).is_blocking)


if __name__ == "__main__":
    unittest.main()
