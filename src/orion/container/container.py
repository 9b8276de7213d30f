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
"""Type-hint driven dependency injection container."""

from __future__ import annotations

import difflib
import inspect
import types
import typing
from collections.abc import Callable
from typing import Any, TypeVar, Union, cast, get_args, get_origin

from orion.container.exceptions import (
    BeanCurrentlyInCreationError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from orion.container.registry import Registration

T = TypeVar("T")

_UNRESOLVABLE = (NoSuchBeanError, NoUniqueBeanError)


def is_implementation(candidate: type, bean_type: Any) -> bool:
    """True if *candidate* can stand in for *bean_type*.

    Runtime-checkable protocols match structurally; other protocols only
    match themselves.
    """
    if candidate is bean_type:
        return True
    try:
        return issubclass(candidate, bean_type)
    except TypeError:
        return False


class Container:
    """Holds singleton registrations and builds them by injecting constructor parameters.

    A parameter annotated ``T`` gets the registration keyed by ``T``, else
    the one registered class implementing ``T``. ``T | None`` gets ``None``
    when nothing matches. Parameters with a default are left out when
    unresolvable.
    """

    def __init__(self) -> None:
        self._registrations: dict[type, Registration] = {}
        self._named: dict[str, Registration] = {}
        self._creating: list[type] = []

    # -- registration ---------------------------------------------------

    def register(self, cls: type, name: str = "", instance: Any = None) -> None:
        """Register *cls*, optionally with a ready-made *instance*."""
        reg = Registration(
            impl_type=cls,
            instance=instance,
            name=name or getattr(cls, "__orion_bean_name__", ""),
        )
        self._registrations[cls] = reg
        if reg.name:
            self._named[reg.name] = reg

    def unregister(self, cls: type) -> None:
        reg = self._registrations.pop(cls)
        if reg.name and self._named.get(reg.name) is reg:
            del self._named[reg.name]

    @property
    def registrations(self) -> dict[type, Registration]:
        return self._registrations

    def contains(self, name: str) -> bool:
        return name in self._named

    # -- resolution -----------------------------------------------------

    def resolve(self, cls: type[T]) -> T:
        reg = self._registrations.get(cls) or self._implementation_of(cls)
        return cast(T, self._instance_for(reg))

    def resolve_by_name(self, name: str) -> Any:
        reg = self._named.get(name)
        if reg is None:
            raise NoSuchBeanError(bean_name=name, suggestions=sorted(self._named))
        return self._instance_for(reg)

    def resolve_param(self, param_type: Any) -> Any:
        """Resolve one annotated parameter (see the class docstring)."""
        if get_origin(param_type) is Union or isinstance(param_type, types.UnionType):
            candidates = [a for a in get_args(param_type) if a is not type(None)]
            if len(candidates) == 1:
                try:
                    return self.resolve(candidates[0])
                except _UNRESOLVABLE:
                    return None
        return self.resolve(param_type)

    def invoke(self, func: Callable[..., T], *, owner: str = "") -> T:
        """Call *func* with every annotated parameter injected."""
        target = func.__init__ if isinstance(func, type) else func  # type: ignore[misc]
        hints = typing.get_type_hints(target)
        hints.pop("return", None)
        params = inspect.signature(target).parameters

        kwargs: dict[str, Any] = {}
        for param_name, param_type in hints.items():
            param = params.get(param_name)
            try:
                kwargs[param_name] = self.resolve_param(param_type)
            except _UNRESOLVABLE:
                if param is not None and param.default is not inspect.Parameter.empty:
                    continue
                type_name = getattr(param_type, "__name__", repr(param_type))
                raise NoSuchBeanError(
                    bean_type=param_type if isinstance(param_type, type) else None,
                    required_by=owner or getattr(func, "__qualname__", repr(func)),
                    parameter=f"{param_name}: {type_name}",
                    suggestions=self._similar_names(type_name),
                ) from None
        return func(**kwargs)

    # -- internals ------------------------------------------------------

    def _implementation_of(self, cls: Any) -> Registration:
        matches = [reg for key, reg in self._registrations.items() if is_implementation(key, cls)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise NoSuchBeanError(
                bean_type=cls if isinstance(cls, type) else None,
                suggestions=self._similar_names(getattr(cls, "__name__", "")),
            )
        raise NoUniqueBeanError(bean_type=cls, candidates=[reg.impl_type for reg in matches])

    def _instance_for(self, reg: Registration) -> Any:
        if not reg.resolved:
            reg.instance = self._construct(reg.impl_type)
        return reg.instance

    def _construct(self, cls: type) -> Any:
        if cls in self._creating:
            raise BeanCurrentlyInCreationError(chain=list(self._creating), current=cls)
        self._creating.append(cls)
        try:
            if cls.__init__ is object.__init__:  # type: ignore[misc]
                return cls()
            return self.invoke(cls, owner=f"{cls.__qualname__}.__init__()")
        finally:
            self._creating.pop()

    def _similar_names(self, name: str) -> list[str]:
        if not name:
            return []
        known = [getattr(cls, "__name__", repr(cls)) for cls in self._registrations]
        return difflib.get_close_matches(name, known, n=5, cutoff=0.4)
