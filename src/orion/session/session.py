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
"""HttpSession — the per-request view of one session record."""

from __future__ import annotations

import enum
import time
from typing import Any

from orion.session.signature import Signature, canonical_signature

RESERVED_PREFIX = "_"
CREATED_KEY = "_created_at"
ACCESSED_KEY = "_last_accessed"
SIGNATURE_KEY = "_ownership_signature"


class SessionState(enum.Enum):
    """Progress of a session through one request."""

    NO_SESSION = "no_session"
    STARTED = "started"
    VALIDATED = "validated"
    INVALIDATED = "invalidated"


class HttpSession:
    """Session ID plus the mutable data dictionary persisted in the store.

    Keys starting with ``_`` hold bookkeeping (creation and access times,
    ownership signature) and are not listed by :meth:`get_attribute_names`.
    Constructing a session stamps the access time with *now*.
    """

    def __init__(
        self,
        session_id: str,
        data: dict[str, Any] | None = None,
        *,
        is_new: bool = False,
        now: float | None = None,
    ) -> None:
        stamp = time.time() if now is None else now
        self._id = session_id
        self._data: dict[str, Any] = {} if data is None else data
        self._data.setdefault(CREATED_KEY, stamp)
        self._data[ACCESSED_KEY] = stamp
        self._is_new = is_new
        self._state = SessionState.STARTED
        self._invalidated = False
        self._regeneration_requested = False

    def __repr__(self) -> str:
        return f"HttpSession(id={self._id[:8]}..., state={self._state.value})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_new(self) -> bool:
        """Created during the current request."""
        return self._is_new

    @property
    def created_at(self) -> float:
        return float(self._data[CREATED_KEY])

    @property
    def last_accessed(self) -> float:
        return float(self._data[ACCESSED_KEY])

    @property
    def state(self) -> SessionState:
        return self._state

    @state.setter
    def state(self, value: SessionState) -> None:
        self._state = value

    @property
    def invalidated(self) -> bool:
        return self._invalidated

    @property
    def regeneration_requested(self) -> bool:
        return self._regeneration_requested

    @property
    def signature(self) -> Signature | None:
        stored = self._data.get(SIGNATURE_KEY)
        return None if stored is None else tuple(stored)

    def attach_signature(self, signature: Signature) -> None:
        """Store the ownership signature. A stored signature is never replaced."""
        if SIGNATURE_KEY in self._data:
            raise RuntimeError("Session already carries an ownership signature")
        self._data[SIGNATURE_KEY] = canonical_signature(signature)

    def get_attribute(self, name: str) -> Any | None:
        return self._data.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._data[name] = value

    def remove_attribute(self, name: str) -> None:
        self._data.pop(name, None)

    def get_attribute_names(self) -> list[str]:
        return [key for key in self._data if not key.startswith(RESERVED_PREFIX)]

    def invalidate(self) -> None:
        """End the session; the record is deleted when the request completes."""
        self._invalidated = True
        self._state = SessionState.INVALIDATED

    def regenerate_id(self) -> None:
        """Re-issue the session under a new ID when the request completes (e.g. after login)."""
        self._regeneration_requested = True

    def get_data(self) -> dict[str, Any]:
        """The live data dictionary, bookkeeping keys included."""
        return self._data
