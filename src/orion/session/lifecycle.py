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
"""Session lifecycle: start, ownership validation, re-issuance, and destruction.

State flow for one request::

    NO_SESSION -> STARTED -> VALIDATED | INVALIDATED

An INVALIDATED session has already been deleted from the store; the caller
starts afresh as if no session ID had been presented.

Store failures raise :class:`~orion.session.errors.StoreUnavailableError`;
they are never reported as "no session". Errors that are already Orion
errors, such as a value the store cannot serialize, propagate unchanged.
Unknown, expired, and malformed session IDs, and records without an access
time, all lead to a brand-new session.
"""

from __future__ import annotations

import logging
import re
import secrets
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from orion.kernel.exceptions import OrionException
from orion.session.errors import StoreUnavailableError
from orion.session.ports.outbound import SessionStore
from orion.session.properties import SessionSettings
from orion.session.session import ACCESSED_KEY, SIGNATURE_KEY, HttpSession, SessionState
from orion.session.signature import (
    AttributeSource,
    DefaultOwnershipSignature,
    OwnershipSignature,
    signatures_match,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{22,128}$")


def new_session_id() -> str:
    """Return a fresh, URL-safe session ID with 256 bits of entropy."""
    return secrets.token_urlsafe(32)


def is_well_formed_id(session_id: Any) -> bool:
    """True if *session_id* could have been issued by :func:`new_session_id`."""
    return isinstance(session_id, str) and _SESSION_ID_RE.fullmatch(session_id) is not None


def _short(session_id: str) -> str:
    return session_id[:8]


class SessionLifecycleController:
    """Creates, validates, re-issues, and destroys sessions.

    Args:
        store: Session persistence.
        settings: Immutable attribute list, ID prefix, and TTL.
        signature: Callable computing a request's ownership signature.
            Defaults to :class:`DefaultOwnershipSignature` over
            ``settings.attributes``.
        clock: Returns the current wall-clock time in seconds.
    """

    def __init__(
        self,
        store: SessionStore,
        settings: SessionSettings | None = None,
        signature: OwnershipSignature | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._settings = settings or SessionSettings()
        self._signature: OwnershipSignature = signature or DefaultOwnershipSignature(
            self._settings.attributes
        )
        self._clock = clock

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def store(self) -> SessionStore:
        return self._store

    async def start(self, request: AttributeSource, session_id: str | None) -> HttpSession:
        """Load the session named by *session_id*, or create a new one.

        A known, unexpired session is returned as-is (its signature is
        checked by :meth:`validate`). Otherwise a new session is created,
        the request's signature is attached, and the record is saved.
        """
        if session_id is not None and is_well_formed_id(session_id):
            data = await self._call("get", lambda: self._store.get(session_id))
            if data is not None:
                if not self._is_expired(data):
                    return HttpSession(session_id, data, now=self._clock())
                logger.debug("Session %s expired", _short(session_id))
                await self._call("delete", lambda: self._store.delete(session_id))
        elif session_id is not None:
            logger.debug("Ignoring malformed session id")

        return await self._create(request)

    async def validate(self, request: AttributeSource, session: HttpSession) -> SessionState:
        """Compare the request's signature with the one stored on *session*.

        On mismatch the record is deleted from the store before returning
        ``INVALIDATED``; the caller must then treat the request as having no
        session. A session that carries no signature yet adopts the current
        one. Re-validating an unchanged request leaves the stored signature
        untouched.
        """
        if session.invalidated:
            return SessionState.INVALIDATED

        if not session.is_new:
            present = await self._call("exists", lambda: self._store.exists(session.id))
            if not present:
                logger.debug("Session %s no longer in store", _short(session.id))
                session.invalidate()
                return SessionState.INVALIDATED

        current = self._signature(request)
        stored = session.signature
        if stored is None:
            session.attach_signature(current)
        elif not signatures_match(stored, current):
            logger.info("Session %s invalidated: ownership signature mismatch", _short(session.id))
            await self._call("delete", lambda: self._store.delete(session.id))
            session.invalidate()
            return SessionState.INVALIDATED

        session.state = SessionState.VALIDATED
        return SessionState.VALIDATED

    async def regenerate(self, request: AttributeSource, session: HttpSession) -> HttpSession:
        """Re-issue *session* under a new ID with a freshly computed signature.

        The old record is deleted and the new one saved. Session attributes
        are carried over.
        """
        data = {k: v for k, v in session.get_data().items() if k != SIGNATURE_KEY}
        replacement = HttpSession(new_session_id(), data, is_new=True, now=self._clock())
        replacement.attach_signature(self._signature(request))
        replacement.state = SessionState.VALIDATED

        await self._call("delete", lambda: self._store.delete(session.id))
        await self._save(replacement)
        logger.debug("Session %s re-issued as %s", _short(session.id), _short(replacement.id))
        return replacement

    async def destroy(self, session: HttpSession) -> None:
        """Delete *session* from the store (explicit logout)."""
        session.invalidate()
        await self._call("delete", lambda: self._store.delete(session.id))
        logger.debug("Session %s destroyed", _short(session.id))

    async def persist(self, session: HttpSession) -> None:
        """Write a validated session back, or delete an invalidated one.

        Saving on every request refreshes the TTL (sliding expiry).
        """
        if session.invalidated:
            await self._call("delete", lambda: self._store.delete(session.id))
        elif session.state is SessionState.VALIDATED:
            await self._save(session)

    async def _create(self, request: AttributeSource) -> HttpSession:
        session = HttpSession(new_session_id(), is_new=True, now=self._clock())
        session.attach_signature(self._signature(request))
        await self._save(session)
        logger.debug("Session %s created", _short(session.id))
        return session

    async def _save(self, session: HttpSession) -> None:
        ttl = self._settings.ttl
        await self._call("save", lambda: self._store.save(session.id, session.get_data(), ttl))

    def _is_expired(self, data: dict[str, Any]) -> bool:
        last_accessed = data.get(ACCESSED_KEY)
        if isinstance(last_accessed, bool) or not isinstance(last_accessed, (int, float)):
            # no usable access time: the record cannot be shown to be fresh
            return True
        return self._clock() - last_accessed > self._settings.ttl

    @staticmethod
    async def _call(operation: str, action: Callable[[], Awaitable[T]]) -> T:
        try:
            return await action()
        except OrionException:
            # already classified, e.g. StoreUnavailableError or CacheSerializationError
            raise
        except Exception as exc:
            logger.error("Session store %s failed: %s", operation, exc)
            raise StoreUnavailableError(operation, str(exc)) from exc
