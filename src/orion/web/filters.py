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
"""OncePerRequestFilter — base class for path-scoped filters that run once per request."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from fnmatch import fnmatch
from typing import Any

from orion.web.ports.filter import CallNext

_FILTERED_SCOPE_KEY = "orion.filtered"


def _matches(path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(path, pattern) for pattern in patterns)


class OncePerRequestFilter(abc.ABC):
    """Filter base class with glob path matching.

    A filter instance handles a request at most once, even if the chain
    (or a nested app) reaches it again. The ASGI scope records which
    filters already ran.

    Attributes:
        url_patterns: Paths the filter applies to; empty means every path.
        exclude_patterns: Paths skipped even when ``url_patterns`` match.
    """

    url_patterns: list[str] = []
    exclude_patterns: list[str] = []

    def should_not_filter(self, request: Any) -> bool:
        path: str = request.url.path
        if self.url_patterns and not _matches(path, self.url_patterns):
            return True
        if _matches(path, self.exclude_patterns):
            return True

        already: set[int] = request.scope.setdefault(_FILTERED_SCOPE_KEY, set())
        if id(self) in already:
            return True
        already.add(id(self))
        return False

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Handle *request*; await ``call_next(request)`` to continue the chain."""
        ...
