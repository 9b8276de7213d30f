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
"""Redis-backed cache adapter."""

from __future__ import annotations

import json
import logging
import math
from datetime import timedelta
from typing import Any

from orion.cache.errors import encode_json
from orion.context.annotations import post_construct, pre_destroy

_logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "orion:session:"


class RedisCacheAdapter:
    """Cache adapter over a ``redis.asyncio.Redis``-like client.

    Values are stored as JSON under ``namespace + key``, so several
    applications can share one database. TTLs are rounded up to whole
    seconds and enforced by Redis itself.
    """

    def __init__(self, client: Any, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._client = client
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    async def get(self, key: str) -> Any | None:
        raw = await self._client.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (ValueError, TypeError):
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            _logger.warning("Discarding undecodable cache entry '%s'", key)
            return None

    async def put(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        expire = max(1, math.ceil(ttl.total_seconds())) if ttl is not None else None
        await self._client.set(self._key(key), encode_json(value).encode(), ex=expire)

    async def evict(self, key: str) -> bool:
        return await self._client.delete(self._key(key)) > 0

    async def exists(self, key: str) -> bool:
        return await self._client.exists(self._key(key)) > 0

    async def clear(self) -> None:
        """Delete every key in this adapter's namespace."""
        keys = [key async for key in self._client.scan_iter(match=f"{self._namespace}*")]
        if keys:
            await self._client.delete(*keys)

    @post_construct
    async def start(self) -> None:
        """Fail startup early if Redis is unreachable."""
        await self._client.ping()

    @pre_destroy
    async def stop(self) -> None:
        await self._client.aclose()
