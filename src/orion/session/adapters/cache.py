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
"""Session store backed by any :class:`~orion.cache.ports.outbound.CacheAdapter`."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from orion.cache.ports.outbound import CacheAdapter


class CacheSessionStore:
    """Stores each session as one cache entry under ``prefix + session_id``.

    The TTL given to :meth:`save` becomes the cache entry TTL, so expiry is
    enforced by the cache on every read.
    """

    def __init__(self, cache: CacheAdapter, prefix: str = "") -> None:
        self._cache = cache
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def get(self, session_id: str) -> dict[str, Any] | None:
        data = await self._cache.get(self._key(session_id))
        return dict(data) if isinstance(data, dict) else None

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        await self._cache.put(self._key(session_id), dict(data), ttl=timedelta(seconds=ttl))

    async def delete(self, session_id: str) -> None:
        await self._cache.evict(self._key(session_id))

    async def exists(self, session_id: str) -> bool:
        return await self._cache.exists(self._key(session_id))
