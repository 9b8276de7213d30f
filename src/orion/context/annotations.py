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
"""Context annotations: auto-configuration, missing-bean conditions, lifecycle hooks."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

AUTO_CONFIGURATION_ORDER = 1000
POST_CONSTRUCT = "__orion_post_construct__"
PRE_DESTROY = "__orion_pre_destroy__"


def auto_configuration(cls: T) -> T:
    """Declare a framework-default ``@configuration`` class.

    Auto-configurations run after every application configuration, in
    ``@order`` (1000 unless set), so ``@conditional_on_missing_bean`` can
    see what the application registered.
    """
    cls.__orion_auto_configuration__ = True  # type: ignore[attr-defined]
    cls.__orion_injectable__ = True  # type: ignore[attr-defined]
    cls.__orion_stereotype__ = "configuration"  # type: ignore[attr-defined]
    if not hasattr(cls, "__orion_order__"):
        cls.__orion_order__ = AUTO_CONFIGURATION_ORDER  # type: ignore[attr-defined]
    return cls


def conditional_on_missing_bean(bean_type: type) -> Callable[[T], T]:
    """Skip the decorated class when a bean of *bean_type* is already registered."""

    def decorator(cls: T) -> T:
        conditions = list(getattr(cls, "__orion_conditions__", []))
        conditions.append({"type": "on_missing_bean", "bean_type": bean_type})
        cls.__orion_conditions__ = conditions  # type: ignore[attr-defined]
        return cls

    return decorator


def post_construct(func: F) -> F:
    """Run after the context has built every bean. May be a coroutine."""
    setattr(func, POST_CONSTRUCT, True)
    return func


def pre_destroy(func: F) -> F:
    """Run when the context stops, in reverse start order. May be a coroutine."""
    setattr(func, PRE_DESTROY, True)
    return func
