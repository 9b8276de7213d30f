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
"""Cache errors."""

from __future__ import annotations

import json
from typing import Any

from orion.kernel.exceptions import OrionException


class CacheSerializationError(OrionException):
    """A value handed to a serializing cache cannot be encoded.

    Raised for values the backend cannot represent (a ``datetime``, a
    ``set``, a circular structure). It is not an outage and does not
    become ``StoreUnavailableError``.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Cache value cannot be serialized: {reason}",
            code="CACHE_VALUE_NOT_SERIALIZABLE",
        )


def encode_json(value: Any) -> str:
    """``json.dumps`` raising :class:`CacheSerializationError` on unsupported values."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise CacheSerializationError(str(exc)) from exc
