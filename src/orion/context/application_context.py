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
"""ApplicationContext: builds the beans of one application and runs their lifecycle."""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Iterator
from typing import Any, TypeVar

from orion.container.container import Container
from orion.container.exceptions import BeanCreationException
from orion.container.markers import get_order
from orion.context.annotations import POST_CONSTRUCT, PRE_DESTROY
from orion.context.condition_evaluator import ConditionEvaluator
from orion.core.config import Config

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ApplicationContext:
    """Container plus configuration processing and lifecycle hooks.

    :meth:`start` builds everything in a fixed sequence:

    1. drop classes whose stereotype ``condition`` is false
    2. run application ``@configuration`` classes and register their ``@bean`` results
    3. drop auto-configurations whose ``@conditional_on_missing_bean`` type now exists
    4. run the remaining auto-configurations in ``@order``
    5. instantiate every singleton, then call ``@post_construct`` hooks

    The :class:`Config` is itself a bean, so ``@bean`` methods can ask for it.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._container = Container()
        self._container.register(Config, instance=config)
        self._started = False
        self._hooked: list[Any] = []

    def register_bean(self, cls: type, *, name: str = "") -> None:
        self._container.register(cls, name=name or getattr(cls, "__orion_bean_name__", ""))

    def register_instance(self, bean_type: type, instance: Any, name: str = "") -> None:
        """Register a ready-made singleton under *bean_type*."""
        self._container.register(bean_type, name=name, instance=instance)

    def get_bean(self, bean_type: type[T]) -> T:
        return self._container.resolve(bean_type)

    def get_bean_by_name(self, name: str) -> Any:
        return self._container.resolve_by_name(name)

    def get_beans_of_type(self, bean_type: type[T]) -> list[T]:
        """Built singletons that are instances of *bean_type*, in ``@order``."""
        found = [
            reg.instance
            for reg in self._container.registrations.values()
            if reg.resolved and isinstance(reg.instance, bean_type)
        ]
        return sorted(found, key=lambda b: get_order(type(b)))

    def contains_bean(self, name: str) -> bool:
        return self._container.contains(name)

    @property
    def container(self) -> Container:
        return self._container

    @property
    def config(self) -> Config:
        return self._config

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        """Build all beans. Any failure surfaces as :class:`BeanCreationException`."""
        try:
            self._filter(bean_pass=False)
            self._run_configurations(auto=False)
            self._filter(bean_pass=True)
            self._run_configurations(auto=True)
            self._instantiate_singletons()
            await self._post_construct()
        except BeanCreationException:
            raise
        except Exception as exc:
            raise BeanCreationException(subsystem="startup", provider="context", reason=str(exc)) from exc

        self._started = True
        logger.info("Application context started with %d beans", len(self._container.registrations))

    async def stop(self) -> None:
        """Call ``@pre_destroy`` hooks, last started first."""
        while self._hooked:
            instance = self._hooked.pop()
            for hook in _hooks(instance, PRE_DESTROY):
                await _call(hook)
        self._started = False

    def _filter(self, *, bean_pass: bool) -> None:
        evaluator = ConditionEvaluator(self._container)
        for cls in list(self._container.registrations):
            if not evaluator.should_include(cls, bean_pass=bean_pass):
                logger.debug("Skipping %s: condition did not match", cls.__qualname__)
                self._container.unregister(cls)

    def _run_configurations(self, *, auto: bool) -> None:
        configurations = sorted(
            (
                cls
                for cls in self._container.registrations
                if getattr(cls, "__orion_stereotype__", "") == "configuration"
                and getattr(cls, "__orion_auto_configuration__", False) == auto
            ),
            key=get_order,
        )
        for cls in configurations:
            owner = self._container.resolve(cls)
            for attr_name, method in inspect.getmembers(owner, inspect.ismethod):
                if getattr(method, "__orion_bean__", False):
                    self._register_bean_method(cls, attr_name, method)

    def _register_bean_method(self, owner: type, attr_name: str, method: Any) -> None:
        bean_type = typing.get_type_hints(method).get("return")
        if bean_type is None:
            logger.warning("Ignoring @bean %s.%s without a return annotation", owner.__qualname__, attr_name)
            return

        instance = self._container.invoke(method, owner=f"{owner.__qualname__}.{attr_name}()")
        self._container.register(
            bean_type,
            name=getattr(method, "__orion_bean_name__", "") or attr_name,
            instance=instance,
        )
        logger.debug("Registered %s from %s.%s", getattr(bean_type, "__name__", bean_type), owner.__qualname__, attr_name)

    def _instantiate_singletons(self) -> None:
        pending = [cls for cls, reg in self._container.registrations.items() if not reg.resolved]
        for cls in sorted(pending, key=get_order):
            self._container.resolve(cls)

    async def _post_construct(self) -> None:
        for reg in list(self._container.registrations.values()):
            if not reg.resolved or any(reg.instance is seen for seen in self._hooked):
                continue
            for hook in _hooks(reg.instance, POST_CONSTRUCT):
                await _call(hook)
            self._hooked.append(reg.instance)


def _hooks(instance: Any, marker: str) -> Iterator[Any]:
    for _, member in inspect.getmembers(instance, inspect.ismethod):
        if getattr(member, marker, False):
            yield member


async def _call(hook: Any) -> None:
    result = hook()
    if inspect.isawaitable(result):
        await result
