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
"""SessionFilter — starts, validates, and persists HTTP sessions via a cookie."""

from __future__ import annotations

from typing import Any

from orion.container.markers import HIGHEST_PRECEDENCE, order
from orion.session.attributes import RequestAttributes
from orion.session.lifecycle import SessionLifecycleController
from orion.session.properties import SessionCookie
from orion.session.session import HttpSession, SessionState
from orion.web.filters import OncePerRequestFilter
from orion.web.ports.filter import CallNext


@order(HIGHEST_PRECEDENCE + 150)
class SessionFilter(OncePerRequestFilter):
    """Attaches a validated ``HttpSession`` to ``request.state.session``.

    The session named by the cookie is loaded (or created) and its ownership
    signature checked before the handler runs. A session failing the check
    is deleted and replaced by a fresh one, so handlers never see data from
    a hijacked session. After the response the session is re-issued if the
    handler asked for it, then saved or deleted, and the cookie is updated.

    Store outages propagate as ``StoreUnavailableError``.
    """

    def __init__(
        self,
        controller: SessionLifecycleController,
        cookie: SessionCookie | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        self._controller = controller
        self._cookie = cookie or SessionCookie()
        if exclude_patterns:
            self.exclude_patterns = list(exclude_patterns)

    @property
    def cookie(self) -> SessionCookie:
        return self._cookie

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        attributes = RequestAttributes(request)
        presented_id = request.cookies.get(self._cookie.name)

        session = await self._load_session(attributes, presented_id)
        request.state.session = session

        try:
            response = await call_next(request)
        finally:
            session = request.state.session
            if session.regeneration_requested and not session.invalidated:
                session = await self._controller.regenerate(attributes, session)
            await self._controller.persist(session)

        if session.invalidated:
            if presented_id is not None:
                response.delete_cookie(
                    key=self._cookie.name,
                    path=self._cookie.path,
                    domain=self._cookie.domain,
                )
        elif session.id != presented_id:
            self._set_cookie(response, session)

        return response

    async def _load_session(self, attributes: RequestAttributes, presented_id: str | None) -> HttpSession:
        session = await self._controller.start(attributes, presented_id)
        if await self._controller.validate(attributes, session) is SessionState.INVALIDATED:
            session = await self._controller.start(attributes, None)
            await self._controller.validate(attributes, session)
        return session

    def _set_cookie(self, response: Any, session: HttpSession) -> None:
        max_age = self._cookie.max_age
        if max_age is None:
            max_age = self._controller.settings.ttl
        response.set_cookie(
            key=self._cookie.name,
            value=session.id,
            max_age=max_age or None,
            path=self._cookie.path,
            domain=self._cookie.domain,
            secure=self._cookie.secure,
            httponly=self._cookie.httponly,
            samesite=self._cookie.samesite,
        )
