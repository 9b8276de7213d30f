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
"""Request attribute lookup for ownership signatures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from starlette.requests import Request

_HEADER_PREFIX = "header."


def _client_ip(request: Request) -> Any | None:
    return request.client.host if request.client is not None else None


def _user_agent(request: Request) -> Any | None:
    return request.headers.get("user-agent")


def _http_version(request: Request) -> Any | None:
    return request.scope.get("http_version")


def _scheme(request: Request) -> Any | None:
    return request.url.scheme


def _host(request: Request) -> Any | None:
    return request.url.hostname


_BUILTINS: dict[str, Callable[[Request], Any | None]] = {
    "client_ip": _client_ip,
    "user_agent": _user_agent,
    "http_version": _http_version,
    "scheme": _scheme,
    "host": _host,
}


class RequestAttributes:
    """Exposes a Starlette request through ``get_attribute(name)``.

    Lookup order:

    1. ``request.state.attributes``: a mapping filled by upstream filters
       (for example a proxy-aware filter storing the real client address).
    2. Built-ins: ``client_ip``, ``user_agent``, ``http_version``, ``scheme``,
       ``host``.
    3. ``header.<name>``: the raw value of a request header.

    Anything else resolves to ``None``.
    """

    __slots__ = ("_request",)

    def __init__(self, request: Request) -> None:
        self._request = request

    @property
    def request(self) -> Request:
        return self._request

    def get_attribute(self, name: str) -> Any | None:
        custom = getattr(self._request.state, "attributes", None)
        if isinstance(custom, Mapping) and name in custom:
            return custom[name]

        builtin = _BUILTINS.get(name)
        if builtin is not None:
            return builtin(self._request)

        if name.startswith(_HEADER_PREFIX):
            return self._request.headers.get(name[len(_HEADER_PREFIX):])

        return None
