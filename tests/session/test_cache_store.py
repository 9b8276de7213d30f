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
"""Tests for CacheSessionStore."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from orion.cache.adapters.memory import InMemoryCache
from orion.session.adapters.cache import CacheSessionStore


class TestCacheSessionStore:
    @pytest.mark.asyncio
    async def test_save_and_get(self):
        store = CacheSessionStore(InMemoryCache(), prefix="ellipse_")
        await store.save("abc", {"user": "alice"}, ttl=60)
        assert await store.get("abc") == {"user": "alice"}
        assert await store.exists("abc")

    @pytest.mark.asyncio
    async def test_keys_are_prefixed(self):
        cache = InMemoryCache()
        store = CacheSessionStore(cache, prefix="ellipse_")
        await store.save("abc", {"user": "alice"}, ttl=60)
        assert await cache.exists("ellipse_abc")
        assert not await cache.exists("abc")

    @pytest.mark.asyncio
    async def test_get_returns_copy(self):
        store = CacheSessionStore(InMemoryCache())
        await store.save("abc", {"user": "alice"}, ttl=60)
        data = await store.get("abc")
        data["user"] = "mallory"
        assert (await store.get("abc"))["user"] == "alice"

    @pytest.mark.asyncio
    async def test_missing_and_deleted(self):
        store = CacheSessionStore(InMemoryCache())
        assert await store.get("nope") is None
        await store.save("abc", {}, ttl=60)
        await store.delete("abc")
        assert not await store.exists("abc")

    @pytest.mark.asyncio
    async def test_ttl_passed_to_cache(self):
        cache = AsyncMock()
        store = CacheSessionStore(cache, prefix="p_")
        await store.save("abc", {"k": 1}, ttl=7200)
        cache.put.assert_awaited_once_with("p_abc", {"k": 1}, ttl=timedelta(seconds=7200))
