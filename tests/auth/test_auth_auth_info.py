import unittest

from docsync.auth import DEFAULT_OAUTH_SCOPES, AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_bearer(self) -> None:
        info = AuthInfo.bearer("secret")
        self.assertEqual(info.kind, "bearer")
        self.assertEqual(info.token, "secret")

    def test_auth_info_valid_oauth(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": "/tmp/client_secrets.json",
                "token_file": "/tmp/token.json",
            },
        )
        self.assertEqual(info.kind, "oauth")
        self.assertEqual(info.scopes, list(DEFAULT_OAUTH_SCOPES))

    def test_auth_info_custom_scopes(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={"client_secrets_file": "c", "token_file": "t", "scopes": ["s1"]},
        )
        self.assertEqual(info.scopes, ["s1"])

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="service_account", data={})

    def test_auth_info_missing_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"client_secrets_file": "x"})
        with self.assertRaises(ValueError):
            AuthInfo(kind="bearer", data={"token": "  "})


if __name__ == "__main__":
    unittest.main()
