# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Filesystem cache adapter — the default session storage backend."""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
import os
import tempfile
import time
from datetime import timedelta
from pathlib import Path
from typing import Any

from orion.cache.errors import encode_json

_logger = logging.getLogger(__name__)

_PREFIX = "orion_"
_SUFFIX = ".cache"


def resolve_storage_path(configured: str | os.PathLike[str] | None) -> Path:
    """Return *configured* if it is a readable and writable directory, else the temp dir."""
    if configured:
        path = Path(configured)
        if path.is_dir() and os.access(path, os.R_OK | os.W_OK):
            return path
        _logger.warning(
            "Session storage path '%s' is not a readable and writable directory, using %s",
            path,
            tempfile.gettempdir(),
        )
    return Path(tempfile.gettempdir())


class FilesystemCache:
    """Cache storing one JSON file per key inside a directory.

    File names are the SHA-256 of the key, so arbitrary keys are safe to
    use. Each file holds the value and an absolute expiry timestamp
    (wall-clock, since entries outlive the process); expired entries are
    removed when read. Values that are not JSON-serializable raise
    :class:`~orion.cache.errors.CacheSerializationError`.

    Blocking file I/O runs in a worker thread. ``OSError`` propagates.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self._directory / f"{_PREFIX}{digest}{_SUFFIX}"

    async def get(self, key: str) -> Any | None:
        """Read a value. Returns None if missing, expired, or unreadable as JSON."""
        return await asyncio.to_thread(self._read, self._path(key))

    async def put(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Write a value atomically with optional TTL."""
        expires_at = time.time() + ttl.total_seconds() if ttl is not None else None
        payload = encode_json({"value": value, "expires_at": expires_at})
        await asyncio.to_thread(self._write, self._path(key), payload)

    async def evict(self, key: str) -> bool:
        """Remove a key. Returns True if the file existed."""
        return await asyncio.to_thread(self._unlink, self._path(key))

    async def exists(self, key: str) -> bool:
        """Check if a key exists and is not expired."""
        return await self.get(key) is not None

    async def clear(self) -> None:
        """Remove every entry written by this adapter."""
        await asyncio.to_thread(self._clear)

    def _read(self, path: Path) -> Any | None:
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(entry, dict):
                raise ValueError("cache entry is not an object")
        except FileNotFoundError:
            return None
        except ValueError:
            # also covers UnicodeDecodeError
            _logger.warning("Discarding corrupt cache file '%s'", path.name)
            self._unlink(path)
            return None

        expires_at = entry.get("expires_at")
        if expires_at is not None and time.time() > expires_at:
            self._unlink(path)
            return None
        return entry.get("value")

    def _write(self, path: Path, payload: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _unlink(path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def _clear(self) -> None:
        if not self._directory.is_dir():
            return
        for path in self._directory.glob(f"{_PREFIX}*{_SUFFIX}"):
            self._unlink(path)
