"""Key/value persistence backends for the local document store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import Iterable, Optional, Protocol

from docsync.errors import StorageError

_LOGGER = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Minimal string key/value surface the local store is built on."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove_many(self, keys: Iterable[str]) -> None: ...


class MemoryBackend:
    """In-process backend (tests, ephemeral services)."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)


class JsonFileBackend:
    """
    Backend storing all keys in one JSON object on disk.

    Writes go to a temp file in the same directory and are moved into place
    with os.replace, so readers never observe a partial write.
    """

    def __init__(self, path: str) -> None:
        if not path:
            raise ValueError("path must be a non-empty string")
        self.path = os.path.expanduser(path)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_for_update()
            data[key] = value
            self._write_all(data)

    def remove_many(self, keys: Iterable[str]) -> None:
        with self._lock:
            data = self._read_for_update()
            for key in keys:
                data.pop(key, None)
            self._write_all(data)

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(
                "Failed to read store file",
                details={"path": self.path},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise StorageError("Store file is not a JSON object", details={"path": self.path})
        return data

    def _read_for_update(self) -> dict[str, str]:
        # A corrupt file is replaced by the next write instead of blocking it.
        try:
            return self._read_all()
        except StorageError as exc:
            if isinstance(exc.cause, OSError):
                raise
            _LOGGER.warning("Discarding unreadable store file %s: %s", self.path, exc)
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        parent_dir = os.path.dirname(self.path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=".docsync-", suffix=".tmp", dir=parent_dir or None
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(
                "Failed to write store file",
                details={"path": self.path},
                cause=exc,
            ) from exc
