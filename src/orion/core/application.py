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
"""Application bootstrap — wires configuration, logging, and the session subsystem."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from orion.container.exceptions import BeanCreationException
from orion.core.config import Config
from orion.logging.structlog_adapter import StructlogAdapter

if TYPE_CHECKING:
    from starlette.applications import Starlette
    from starlette.routing import BaseRoute

    from orion.context.application_context import ApplicationContext


class OrionApplication:
    """Owns the configuration, logging, and ApplicationContext of one process.

    Startup sequence:
    1. Load configuration (framework defaults, then ``orion.yaml`` in *config_dir*)
    2. Configure logging from ``orion.logging``
    3. Register the session auto-configurations plus *beans*
    4. On :meth:`startup`, start the context (user beans first, defaults after)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        config_dir: str | Path | None = None,
        active_profiles: list[str] | None = None,
        beans: Sequence[type] = (),
    ) -> None:
        if config is None:
            if config_dir is not None:
                config = Config.from_sources(config_dir, active_profiles=active_profiles)
            else:
                config = Config(Config.load_framework_defaults())
        self.config = config

        self._logging = StructlogAdapter()
        self._logging.configure(self.config)
        self._logger = self._logging.get_logger("orion.core")

        # Deferred imports keep orion.core importable without the web stack
        from orion.context.application_context import ApplicationContext
        from orion.session.auto_configuration import SESSION_AUTO_CONFIGURATIONS

        self._context = ApplicationContext(self.config)
        for cls in (*beans, *SESSION_AUTO_CONFIGURATIONS):
            self._context.register_bean(cls)

        self._startup_time: float = 0.0

    @property
    def context(self) -> ApplicationContext:
        return self._context

    @property
    def startup_time_seconds(self) -> float:
        return self._startup_time

    async def startup(self) -> None:
        """Start the ApplicationContext, logging the outcome."""
        start = time.perf_counter()
        for source in self.config.loaded_sources:
            self._logger.info("loaded_config", source=source)

        try:
            await self._context.start()
        except BeanCreationException as exc:
            self._logger.error(
                "application_failed",
                error=str(exc),
                subsystem=exc.subsystem,
                provider=exc.provider,
            )
            raise

        self._startup_time = time.perf_counter() - start
        self._logger.info("application_started", seconds=round(self._startup_time, 3))

    async def shutdown(self) -> None:
        await self._context.stop()
        self._logger.info("application_stopped")

    def asgi_app(self, routes: Sequence[BaseRoute] = (), debug: bool = False) -> Starlette:
        """Build the Starlette app; the context starts and stops with its lifespan."""
        from orion.web.adapters.starlette.app import create_app

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            await self.startup()
            try:
                yield
            finally:
                await self.shutdown()

        return create_app(routes=routes, context=self._context, debug=debug, lifespan=lifespan)
