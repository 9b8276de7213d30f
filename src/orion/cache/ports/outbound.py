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
"""Cache port: the key-value backend behind the default session store."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheAdapter(Protocol):
    """Async key-value cache with per-entry expiry.

    Implementations must never return an expired entry. Backend I/O
    errors are raised as-is; the session layer turns them into
    ``StoreUnavailableError``.
    """

    async def get(self, key: str) -> Any | None:
        """The stored value, or ``None`` when missing or expired."""
        ...

    async def put(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store *value*, replacing any previous entry. ``ttl=None`` never expires."""
        ...

    async def evict(self, key: str) -> bool:
        """Remove *key*; ``True`` if an entry was removed."""
        ...

    async def exists(self, key: str) -> bool: ...

    async def clear(self) -> None:
        """Remove every entry this adapter owns."""
        ...
