"""Authentication information for docsync remote calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_OAUTH_SCOPES: tuple[str, ...] = (
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
)


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information used to build request headers.

    Supported kinds:
        kind = "bearer"
            data must include:
                - token
        kind = "oauth"
            data must include:
                - client_secrets_file
                - token_file
            data may include:
                - scopes (list of str)
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind not in ("bearer", "oauth"):
            raise ValueError("AuthInfo.kind must be 'bearer' or 'oauth'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        required = ("token",) if self.kind == "bearer" else ("client_secrets_file", "token_file")
        for key in required:
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @classmethod
    def bearer(cls, token: str) -> "AuthInfo":
        return cls(kind="bearer", data={"token": token})

    @property
    def token(self) -> str:
        """Static bearer token (kind='bearer')."""
        return str(self.data["token"])

    @property
    def client_secrets_file(self) -> str:
        """Path to OAuth client secrets JSON."""
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        """Path to OAuth token JSON (authorized user)."""
        return str(self.data["token_file"])

    @property
    def scopes(self) -> list[str]:
        scopes = self.data.get("scopes")
        if isinstance(scopes, (list, tuple)) and scopes:
            return [str(s) for s in scopes]
        return list(DEFAULT_OAUTH_SCOPES)
