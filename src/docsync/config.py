"""Runtime configuration for docsync."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Optional

from docsync.auth import AuthInfo
from docsync.gateway.fields import DEFAULT_LIST_PATH, DEFAULT_UPLOAD_PATH
from docsync.mirror import DEFAULT_MAX_ERRORS
from docsync.util.files import MAX_FILE_SIZE

ENV_API_URL = "DOCSYNC_API_URL"
ENV_API_TOKEN = "DOCSYNC_API_TOKEN"
ENV_STORAGE_PATH = "DOCSYNC_STORAGE_PATH"
ENV_TIMEOUT = "DOCSYNC_TIMEOUT"
ENV_SYNC_INTERVAL = "DOCSYNC_SYNC_INTERVAL"
ENV_OAUTH_CLIENT_SECRETS = "DOCSYNC_OAUTH_CLIENT_SECRETS"
ENV_OAUTH_TOKEN_FILE = "DOCSYNC_OAUTH_TOKEN_FILE"
ENV_OAUTH_SCOPES = "DOCSYNC_OAUTH_SCOPES"

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_STORAGE_PATH = "~/.docsync/store.json"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SYNC_INTERVAL_SEC = 300


@dataclass(slots=True)
class DocSyncConfig:
    """Settings needed to build a DocumentService."""

    base_url: str = DEFAULT_BASE_URL
    list_path: str = DEFAULT_LIST_PATH
    upload_path: str = DEFAULT_UPLOAD_PATH
    # Empty -> in-memory store.
    storage_path: str = DEFAULT_STORAGE_PATH
    request_timeout: float = DEFAULT_TIMEOUT
    sync_interval: int = DEFAULT_SYNC_INTERVAL_SEC
    max_file_size: int = MAX_FILE_SIZE
    mirror_error_limit: int = DEFAULT_MAX_ERRORS
    auth: Optional[AuthInfo] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> DocSyncConfig:
        base_url = str(options.get("base_url", "") or "").strip() or DEFAULT_BASE_URL
        list_path = str(options.get("list_path", "") or "").strip() or DEFAULT_LIST_PATH
        upload_path = str(options.get("upload_path", "") or "").strip() or DEFAULT_UPLOAD_PATH
        storage_raw = options.get("storage_path", DEFAULT_STORAGE_PATH)
        storage_path = str(storage_raw).strip() if storage_raw is not None else ""

        try:
            timeout = max(1.0, float(options.get("request_timeout", DEFAULT_TIMEOUT)))
        except (TypeError, ValueError):
            timeout = DEFAULT_TIMEOUT
        try:
            interval = max(1, int(options.get("sync_interval", DEFAULT_SYNC_INTERVAL_SEC)))
        except (TypeError, ValueError):
            interval = DEFAULT_SYNC_INTERVAL_SEC
        try:
            max_size = max(1, int(options.get("max_file_size", MAX_FILE_SIZE)))
        except (TypeError, ValueError):
            max_size = MAX_FILE_SIZE
        try:
            error_limit = max(1, int(options.get("mirror_error_limit", DEFAULT_MAX_ERRORS)))
        except (TypeError, ValueError):
            error_limit = DEFAULT_MAX_ERRORS

        auth = options.get("auth")
        if not isinstance(auth, AuthInfo):
            auth = _auth_from_options(options)

        return cls(
            base_url=base_url,
            list_path=list_path,
            upload_path=upload_path,
            storage_path=storage_path,
            request_timeout=timeout,
            sync_interval=interval,
            max_file_size=max_size,
            mirror_error_limit=error_limit,
            auth=auth,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> DocSyncConfig:
        env = os.environ if environ is None else environ
        options: dict[str, Any] = {
            "base_url": env.get(ENV_API_URL),
            "api_token": env.get(ENV_API_TOKEN),
            "storage_path": env.get(ENV_STORAGE_PATH, DEFAULT_STORAGE_PATH),
            "oauth_client_secrets_file": env.get(ENV_OAUTH_CLIENT_SECRETS),
            "oauth_token_file": env.get(ENV_OAUTH_TOKEN_FILE),
            "oauth_scopes": env.get(ENV_OAUTH_SCOPES),
        }
        if ENV_TIMEOUT in env:
            options["request_timeout"] = env[ENV_TIMEOUT]
        if ENV_SYNC_INTERVAL in env:
            options["sync_interval"] = env[ENV_SYNC_INTERVAL]
        return cls.from_mapping(options)

    @property
    def sync_interval_delta(self) -> timedelta:
        return timedelta(seconds=self.sync_interval)


def _auth_from_options(options: Mapping[str, Any]) -> Optional[AuthInfo]:
    """A static token wins over OAuth; OAuth needs both file paths."""
    token = str(options.get("api_token", "") or "").strip()
    if token:
        return AuthInfo.bearer(token)

    client_secrets = str(options.get("oauth_client_secrets_file", "") or "").strip()
    token_file = str(options.get("oauth_token_file", "") or "").strip()
    if not (client_secrets and token_file):
        return None

    data: dict[str, Any] = {"client_secrets_file": client_secrets, "token_file": token_file}
    scopes = options.get("oauth_scopes")
    if isinstance(scopes, str):
        scopes = scopes.replace(",", " ").split()
    if scopes:
        data["scopes"] = [str(s) for s in scopes]
    return AuthInfo(kind="oauth", data=data)
