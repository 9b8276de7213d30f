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
"""Orion DI container: constructor injection driven by type hints."""

from orion.container.container import Container
from orion.container.markers import (
    HIGHEST_PRECEDENCE,
    LOWEST_PRECEDENCE,
    bean,
    component,
    configuration,
    get_order,
    order,
)
from orion.container.registry import Registration

__all__ = [
    "Container",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "Registration",
    "bean",
    "component",
    "configuration",
    "get_order",
    "order",
]
