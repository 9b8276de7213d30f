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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from orion.core.config import Config

_SECRET_KEYS = ("session_id", "old_session_id", "new_session_id")
_VISIBLE_CHARS = 8


class _OrionHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Root handler installed by the adapter; replaced on reconfiguration."""


def mask_session_ids(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Truncate session IDs in log events; a full ID is a bearer credential."""
    for key in _SECRET_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > _VISIBLE_CHARS:
            event_dict[key] = value[:_VISIBLE_CHARS] + "..."
    return event_dict


class StructlogAdapter:
    """Routes structlog and stdlib ``logging`` through one structlog formatter.

    Library modules log with ``logging.getLogger(__name__)``; their records
    get the same timestamp, level, and logger name as structlog events and
    are rendered as console text or JSON (``orion.logging.format``).
    ``orion.logging.level.root`` sets the root level and any other key under
    ``orion.logging.level`` sets the level of that logger.
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = {str(k): str(v).upper() for k, v in config.get_section("orion.logging.level").items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(config.get("orion.logging.format", "console")).lower()

        self._install()
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _install(self) -> None:
        shared: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            mask_session_ids,
        ]
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()

        structlog.configure(
            processors=[
                *shared,
                structlog.processors.StackInfoRenderer(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        handler = _OrionHandler(sys.stdout)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            )
        )

        root = logging.getLogger()
        for existing in [h for h in root.handlers if isinstance(h, _OrionHandler)]:
            root.removeHandler(existing)
        root.addHandler(handler)
        root.setLevel(getattr(logging, self._root_level, logging.INFO))
