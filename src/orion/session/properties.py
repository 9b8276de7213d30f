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
"""Session configuration: bound properties, cookie parameters, and runtime settings."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from orion.core.config import config_properties

DEFAULT_ID_PREFIX = "ellipse_"
DEFAULT_TTL = 7200
DEFAULT_COOKIE_NAME = "ORION_SESSION"


@config_properties(prefix="orion.session")
@dataclass
class SessionProperties:
    """Configuration for the session subsystem (orion.session.*)."""

    id_prefix: str = DEFAULT_ID_PREFIX
    ttl: int = DEFAULT_TTL
    cookie: dict = field(default_factory=dict)
    cache: dict = field(default_factory=lambda: {"provider": "filesystem", "path": ""})
    ownership: dict = field(default_factory=lambda: {"attributes": []})
    exclude_paths: list = field(default_factory=list)

    @property
    def attributes(self) -> tuple[str, ...]:
        """Ordered ownership attribute names."""
        names = self.ownership.get("attributes") or []
        if isinstance(names, str):
            names = [n.strip() for n in names.split(",") if n.strip()]
        return tuple(str(n) for n in names)


@dataclass(frozen=True)
class SessionCookie:
    """Parameters of the session cookie.

    ``max_age`` of ``None`` means "use the session TTL"; ``0`` makes it a
    browser-session cookie.
    """

    name: str = DEFAULT_COOKIE_NAME
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"
    max_age: int | None = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any] | None) -> SessionCookie:
        """Build from configuration, ignoring unknown keys. Empty input gives defaults."""
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {}
        for key, value in (params or {}).items():
            name = key.replace("-", "_")
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class SessionSettings:
    """Immutable process-wide settings consumed by the lifecycle controller.

    Changing ``attributes`` between deployments invalidates every existing
    session, since stored signatures were computed from the old list.
    """

    attributes: tuple[str, ...] = ()
    id_prefix: str = DEFAULT_ID_PREFIX
    ttl: int = DEFAULT_TTL

    def __post_init__(self) -> None:
        if isinstance(self.attributes, str) or not isinstance(self.attributes, Sequence):
            raise TypeError("attributes must be a sequence of attribute names")
        object.__setattr__(self, "attributes", tuple(self.attributes))
        if self.ttl <= 0:
            raise ValueError(f"Session TTL must be positive, got {self.ttl}")

    @classmethod
    def from_properties(cls, properties: SessionProperties) -> SessionSettings:
        return cls(
            attributes=properties.attributes,
            id_prefix=properties.id_prefix,
            ttl=int(properties.ttl),
        )
