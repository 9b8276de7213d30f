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
"""Orion web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from orion.container.markers import get_order
from orion.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from orion.web.errors import global_exception_handler
from orion.web.ports.filter import WebFilter

if TYPE_CHECKING:
    from orion.context.application_context import ApplicationContext


def create_app(
    routes: Sequence[BaseRoute] = (),
    context: ApplicationContext | None = None,
    filters: Sequence[WebFilter] = (),
    debug: bool = False,
    lifespan: Any = None,
) -> Starlette:
    """Create a Starlette application wired with Orion's filter chain.

    Filters are *filters* plus every ``WebFilter`` bean initialized in
    *context* (such as the ``SessionFilter``), sorted by ``@order``. Context
    beans are collected on the first request, so the context may be started
    by the application lifespan. Every unhandled exception is rendered by
    :func:`global_exception_handler`.
    """

    def _collect_filters() -> list[WebFilter]:
        chain: list[WebFilter] = list(filters)
        if context is not None:
            for web_filter in context.get_beans_of_type(WebFilter):  # type: ignore[type-abstract]
                if web_filter not in chain:
                    chain.append(web_filter)
        chain.sort(key=lambda f: get_order(type(f)))
        return chain

    return Starlette(
        debug=debug,
        routes=list(routes),
        middleware=[Middleware(WebFilterChainMiddleware, filters=_collect_filters)],
        exception_handlers={Exception: global_exception_handler},
        lifespan=lifespan,
    )
