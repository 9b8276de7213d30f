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
"""Class and method markers read by the container and ApplicationContext.

Every marker only sets ``__orion_*__`` attributes; nothing is registered
until the class is handed to :meth:`ApplicationContext.register_bean`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

HIGHEST_PRECEDENCE: int = -(2**31)
LOWEST_PRECEDENCE: int = 2**31 - 1


def order(value: int) -> Callable[[T], T]:
    """Position a bean, configuration class, or web filter. Lower runs first."""

    def decorator(cls: T) -> T:
        cls.__orion_order__ = value  # type: ignore[attr-defined]
        return cls

    return decorator


def get_order(cls: type) -> int:
    return getattr(cls, "__orion_order__", 0)


def _stereotype(kind: str) -> Callable[..., Any]:
    def mark(
        cls: T | None = None,
        *,
        name: str = "",
        condition: Callable[[], bool] | None = None,
    ) -> Any:
        def decorator(target: T) -> T:
            target.__orion_injectable__ = True  # type: ignore[attr-defined]
            target.__orion_stereotype__ = kind  # type: ignore[attr-defined]
            target.__orion_condition__ = condition  # type: ignore[attr-defined]
            if name:
                target.__orion_bean_name__ = name  # type: ignore[attr-defined]
            return target

        return decorator(cls) if cls is not None else decorator

    mark.__name__ = mark.__qualname__ = kind
    mark.__doc__ = f"Mark a class as a {kind} bean. Usable bare or with name/condition."
    return mark


component = _stereotype("component")
configuration = _stereotype("configuration")


def bean(func: F | None = None, *, name: str = "") -> Any:
    """Mark a method of a ``@configuration`` class as a bean factory.

    The bean is registered under the method's return annotation, so a
    factory returning ``SessionStore`` takes the place of the default
    session store. Parameters are injected by type.
    """

    def decorator(target: F) -> F:
        target.__orion_bean__ = True  # type: ignore[attr-defined]
        if name:
            target.__orion_bean_name__ = name  # type: ignore[attr-defined]
        return target

    return decorator(func) if func is not None else decorator
