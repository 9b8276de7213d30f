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
"""WebFilterChainMiddleware — pure ASGI middleware running the WebFilter chain."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from orion.web.ports.filter import CallNext, WebFilter

FilterSource = Sequence[WebFilter] | Callable[[], Sequence[WebFilter]]


async def _buffered(app: ASGIApp, request: Request) -> Response:
    """Run *app* for *request* and collect what it sends into a ``Response``."""
    start: Message = {"status": 200, "headers": []}
    chunks: list[bytes] = []

    async def collect(message: Message) -> None:
        if message["type"] == "http.response.start":
            start.update(message)
        elif message["type"] == "http.response.body" and message.get("body"):
            chunks.append(message["body"])

    await app(request.scope, request.receive, collect)

    response = Response(content=b"".join(chunks), status_code=start["status"])
    response.raw_headers[:] = list(start["headers"])
    return response


def _link(web_filter: WebFilter, downstream: CallNext) -> CallNext:
    async def step(request: Any) -> Any:
        if web_filter.should_not_filter(request):
            return await downstream(request)
        return await web_filter.do_filter(request, downstream)

    return step


class WebFilterChainMiddleware:
    """Runs *filters* in the given order around the downstream ASGI app.

    *filters* may be a callable returning the filters; it is called on the
    first HTTP request, once the application context has started.

    The downstream response is buffered so filters can read its status and
    set headers or cookies. Non-HTTP scopes bypass the chain.
    """

    def __init__(self, app: ASGIApp, filters: FilterSource = ()) -> None:
        self.app = app
        self._source = filters
        self._filters: list[WebFilter] | None = None
        self._chain: CallNext | None = None

    @property
    def filters(self) -> list[WebFilter]:
        if self._filters is None:
            source = self._source
            self._filters = list(source() if callable(source) else source)
        return self._filters

    def _build_chain(self) -> CallNext:
        async def endpoint(request: Request) -> Response:
            return await _buffered(self.app, request)

        chain: CallNext = endpoint
        for web_filter in reversed(self.filters):
            chain = _link(web_filter, chain)
        return chain

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if self._chain is None:
            self._chain = self._build_chain()
        response = cast(Response, await self._chain(Request(scope, receive, send)))
        await response(scope, receive, send)
