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
"""Session subsystem auto-configuration.

Each bean below is the default used when the application registers none of
its own: a user ``@bean`` returning the same type replaces it.

Dependency order (lower ``@order`` processed first)::

    SessionProperties -> CacheAdapter -> SessionStore -> OwnershipSignature
        -> SessionLifecycleController -> SessionFilter
"""

from __future__ import annotations

from orion.cache.adapters.filesystem import FilesystemCache, resolve_storage_path
from orion.cache.ports.outbound import CacheAdapter
from orion.container.exceptions import BeanCreationException
from orion.container.markers import bean, order
from orion.context.annotations import auto_configuration, conditional_on_missing_bean
from orion.core.config import Config
from orion.session.adapters.cache import CacheSessionStore
from orion.session.filter import SessionFilter
from orion.session.lifecycle import SessionLifecycleController
from orion.session.ports.outbound import SessionStore
from orion.session.properties import SessionCookie, SessionProperties, SessionSettings
from orion.session.signature import DefaultOwnershipSignature, OwnershipSignature


@auto_configuration
@order(1000)
@conditional_on_missing_bean(SessionProperties)
class SessionPropertiesAutoConfiguration:
    """Binds ``orion.session.*`` onto :class:`SessionProperties`."""

    @bean
    def session_properties(self, config: Config) -> SessionProperties:
        return config.bind(SessionProperties)


@auto_configuration
@order(1010)
@conditional_on_missing_bean(CacheAdapter)
class SessionCacheAutoConfiguration:
    """Default session cache, chosen by ``orion.session.cache.provider``.

    ``filesystem`` (default) writes under ``orion.session.cache.path`` when
    that directory is readable and writable, otherwise under the system
    temp dir.
    """

    @bean
    def session_cache(self, properties: SessionProperties) -> CacheAdapter:
        provider = str(properties.cache.get("provider", "filesystem")).lower()

        if provider == "memory":
            from orion.cache.adapters.memory import InMemoryCache

            return InMemoryCache()

        if provider == "redis":
            try:
                import redis.asyncio as aioredis
            except ImportError as exc:
                raise BeanCreationException(
                    subsystem="session",
                    provider="redis",
                    reason="the 'redis' package is not installed (pip install orion-session[redis])",
                ) from exc

            from orion.cache.adapters.redis import DEFAULT_NAMESPACE, RedisCacheAdapter

            redis_section = properties.cache.get("redis") or {}
            url = str(redis_section.get("url", "redis://localhost:6379/0"))
            namespace = str(redis_section.get("namespace", DEFAULT_NAMESPACE))
            return RedisCacheAdapter(client=aioredis.from_url(url), namespace=namespace)

        if provider != "filesystem":
            raise BeanCreationException(
                subsystem="session",
                provider=provider,
                reason="unknown cache provider, expected 'filesystem', 'memory' or 'redis'",
            )

        return FilesystemCache(resolve_storage_path(properties.cache.get("path")))


@auto_configuration
@order(1020)
@conditional_on_missing_bean(SessionStore)
class SessionStoreAutoConfiguration:
    """Cache-backed store keying records as ``id_prefix + session_id``."""

    @bean
    def session_store(self, cache: CacheAdapter, properties: SessionProperties) -> SessionStore:
        return CacheSessionStore(cache, prefix=properties.id_prefix)


@auto_configuration
@order(1030)
@conditional_on_missing_bean(OwnershipSignature)
class OwnershipSignatureAutoConfiguration:
    """Signature over ``orion.session.ownership.attributes``."""

    @bean
    def ownership_signature(self, properties: SessionProperties) -> OwnershipSignature:
        return DefaultOwnershipSignature(properties.attributes)


@auto_configuration
@order(1040)
@conditional_on_missing_bean(SessionLifecycleController)
class SessionLifecycleAutoConfiguration:
    @bean
    def session_lifecycle_controller(
        self,
        store: SessionStore,
        signature: OwnershipSignature,
        properties: SessionProperties,
    ) -> SessionLifecycleController:
        return SessionLifecycleController(
            store=store,
            settings=SessionSettings.from_properties(properties),
            signature=signature,
        )


@auto_configuration
@order(1050)
@conditional_on_missing_bean(SessionFilter)
class SessionFilterAutoConfiguration:
    @bean
    def session_filter(
        self,
        controller: SessionLifecycleController,
        properties: SessionProperties,
    ) -> SessionFilter:
        return SessionFilter(
            controller,
            cookie=SessionCookie.from_mapping(properties.cookie),
            exclude_patterns=list(properties.exclude_paths),
        )


SESSION_AUTO_CONFIGURATIONS: tuple[type, ...] = (
    SessionPropertiesAutoConfiguration,
    SessionCacheAutoConfiguration,
    SessionStoreAutoConfiguration,
    OwnershipSignatureAutoConfiguration,
    SessionLifecycleAutoConfiguration,
    SessionFilterAutoConfiguration,
)
