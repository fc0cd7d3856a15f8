"""Google OAuth credentials as HTTP request headers."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from docsync.errors import AuthError

from .auth_info import AuthInfo

_LOGGER = logging.getLogger(__name__)


class OAuthClient:
    """Load, refresh and apply Google OAuth credentials as request headers."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "oauth":
            raise ValueError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info
        self._creds: Optional[Credentials] = None

    def get_credentials(
        self,
        scopes: Optional[Sequence[str]] = None,
        ensure_valid: bool = True,
    ) -> Credentials:
        """
        Return OAuth credentials for `scopes` (defaults to AuthInfo.scopes).

        Order: token file, then refresh (when ensure_valid), then the
        interactive consent flow.

        Raises:
            AuthError: on load/refresh/flow failures.
        """
        use_scopes = list(scopes) if scopes is not None else self._auth_info.scopes
        if not use_scopes or not all(isinstance(s, str) and s.strip() for s in use_scopes):
            raise AuthError("scopes must be a non-empty sequence of strings")

        creds = self._load_token(use_scopes)
        if creds is not None:
            if not ensure_valid:
                return creds
            if not creds.valid and creds.refresh_token:
                self._refresh(creds)
            if creds.valid:
                return creds

        return self._run_consent_flow(use_scopes)

    def authorization_headers(self) -> dict[str, str]:
        """
        Return headers carrying a currently valid access token.

        Credentials are cached and only reloaded once they stop being valid.
        """
        if self._creds is None or not self._creds.valid:
            self._creds = self.get_credentials(ensure_valid=True)

        headers: dict[str, str] = {}
        self._creds.apply(headers)
        return headers

    def _load_token(self, scopes: list[str]) -> Optional[Credentials]:
        token_file = self._auth_info.token_file
        if not os.path.exists(token_file):
            return None
        try:
            return Credentials.from_authorized_user_file(token_file, scopes=scopes)
        except (OSError, ValueError) as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

    def _refresh(self, creds: Credentials) -> None:
        _LOGGER.debug("Refreshing OAuth access token")
        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            raise AuthError(
                "Failed to refresh OAuth credentials",
                details={"token_file": self._auth_info.token_file},
                cause=exc,
            ) from exc
        self._save_credentials(creds)

    def _run_consent_flow(self, scopes: list[str]) -> Credentials:
        client_secrets = self._auth_info.client_secrets_file
        _LOGGER.info("Starting OAuth consent flow with %s", client_secrets)
        try:
            flow = InstalledAppFlow.from_client_secrets_file(client_secrets, scopes=scopes)
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": self._auth_info.token_file,
                },
                cause=exc,
            ) from exc
        self._save_credentials(creds)
        return creds

    def _save_credentials(self, creds: Credentials) -> None:
        token_file = self._auth_info.token_file
        try:
            token_dir = os.path.dirname(token_file)
            if token_dir:
                os.makedirs(token_dir, exist_ok=True)
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
