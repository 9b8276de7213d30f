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
"""Session errors."""

from __future__ import annotations

from orion.kernel.exceptions import ServiceUnavailableException


class StoreUnavailableError(ServiceUnavailableException):
    """The session store could not be read or written.

    Raised instead of reporting "no session", so callers fail closed.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        super().__init__(
            f"Session store unavailable during {operation}: {reason}",
            code="SESSION_STORE_UNAVAILABLE",
            context={"operation": operation},
        )
