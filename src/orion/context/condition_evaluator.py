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
"""Evaluation of class-level bean conditions."""

from __future__ import annotations

from typing import Any

from orion.container.container import Container, is_implementation


class ConditionEvaluator:
    """Decides whether a registered class stays in the container.

    Startup evaluates conditions twice. The first pass runs the
    stereotype ``condition`` callable. The second runs
    ``on_missing_bean`` checks, after application configurations have
    registered their beans.
    """

    def __init__(self, container: Container) -> None:
        self._container = container

    def should_include(self, cls: type, *, bean_pass: bool = False) -> bool:
        if not bean_pass:
            condition = getattr(cls, "__orion_condition__", None)
            return condition is None or bool(condition())

        return all(
            not self._has_bean_of_type(cond["bean_type"], exclude=cls)
            for cond in getattr(cls, "__orion_conditions__", [])
            if cond["type"] == "on_missing_bean"
        )

    def _has_bean_of_type(self, bean_type: Any, *, exclude: type) -> bool:
        # @bean results are keyed by their return type; classes match structurally.
        return any(
            is_implementation(registered, bean_type)
            for registered in self._container.registrations
            if registered is not exclude
        )
