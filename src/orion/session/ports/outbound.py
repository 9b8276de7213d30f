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
"""Session store port."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Persistence for session records, keyed by opaque session ID.

    Callers serialize access per session ID. Any exception raised here is
    reported as ``StoreUnavailableError``, never as a missing session.
    """

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """The record's data, or ``None`` if unknown or expired."""
        ...

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        """Create or replace the record; it expires *ttl* seconds from now."""
        ...

    async def delete(self, session_id: str) -> None:
        """Remove the record. Deleting an unknown ID is not an error."""
        ...

    async def exists(self, session_id: str) -> bool: ...
