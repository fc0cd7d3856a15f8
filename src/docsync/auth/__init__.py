"""Public auth exports for docsync."""

from __future__ import annotations

from .auth_info import DEFAULT_OAUTH_SCOPES, AuthInfo
from .headers import AuthHeaderProvider
from .oauth_client import OAuthClient

__all__ = ["AuthInfo", "AuthHeaderProvider", "OAuthClient", "DEFAULT_OAUTH_SCOPES"]
