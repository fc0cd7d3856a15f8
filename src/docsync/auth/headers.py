"""Turn AuthInfo into the headers attached to remote requests."""

from __future__ import annotations

from typing import Optional

from .auth_info import AuthInfo
from .oauth_client import OAuthClient


class AuthHeaderProvider:
    """
    Header source for the remote gateway.

    Blocking (OAuth refresh may hit the network); callers on the event loop
    should run `headers()` in a worker thread.
    """

    def __init__(self, auth_info: Optional[AuthInfo] = None) -> None:
        self._auth_info = auth_info
        self._oauth: Optional[OAuthClient] = None
        if auth_info is not None and auth_info.kind == "oauth":
            self._oauth = OAuthClient(auth_info)

    @property
    def is_blocking(self) -> bool:
        return self._oauth is not None

    def headers(self) -> dict[str, str]:
        if self._auth_info is None:
            return {}
        if self._oauth is not None:
            return self._oauth.authorization_headers()
        return {"Authorization": f"Bearer {self._auth_info.token}"}
