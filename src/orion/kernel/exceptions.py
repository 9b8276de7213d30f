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
"""Exception hierarchy shared by all Orion subsystems.

Handlers catch a branch (``InfrastructureException``) or the root
(``OrionException``); the web layer maps each branch to an HTTP status.
"""

from __future__ import annotations

from typing import Any


class OrionException(Exception):
    """Root of every Orion error.

    Args:
        message: Human-readable description.
        code: Stable machine-readable code, e.g. ``"SESSION_STORE_UNAVAILABLE"``.
        context: Extra details rendered into error responses.
    """

    def __init__(self, message: str, code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict[str, Any] = dict(context) if context else {}


class BusinessException(OrionException):
    """The request broke an application rule."""


class SecurityException(OrionException):
    """The caller is not authenticated or not allowed."""


class InfrastructureException(OrionException):
    """A backing system (storage, cache, network) failed."""


class ServiceUnavailableException(InfrastructureException):
    """A backing system is unreachable; retrying later may succeed."""
