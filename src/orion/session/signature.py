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
"""Session ownership signatures.

A signature is the ordered tuple of values a request has for a configured
list of attribute names (client address, user agent, ...). A session stores
the signature of the request that created it; a later request presenting
the same session ID must produce an equal signature, otherwise the session
is considered hijacked.

Absent attributes are kept as ``None``, so an absent attribute matches
another absent attribute but never an empty string.

With no attribute names configured every signature is ``()`` and ownership
validation always passes. That is deliberate policy: an application opts in
to hijack detection by listing attributes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

Signature = tuple[Any, ...]


@runtime_checkable
class AttributeSource(Protocol):
    """Anything that can look up a request attribute by name."""

    def get_attribute(self, name: str) -> Any | None:
        """Return the attribute value, or ``None`` when the request lacks it."""
        ...


class OwnershipSignature(Protocol):
    """Callable computing the ownership signature of a request.

    Applications may register any callable with this shape to replace
    :class:`DefaultOwnershipSignature`.
    """

    def __call__(self, request: AttributeSource) -> Signature: ...


def compute_signature(request: AttributeSource, attribute_names: Sequence[str]) -> Signature:
    """Return the values of *attribute_names* on *request*, in order."""
    return tuple(request.get_attribute(name) for name in attribute_names)


def _canonical(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _canonical(item) for key, item in value.items()}
    return value


def canonical_signature(signature: Sequence[Any]) -> list[Any]:
    """The form a signature is stored in.

    Nested tuples become lists and mapping keys become strings, matching
    what a JSON-backed store hands back. Storing and comparing both go
    through this, so a signature read from any store equals the one
    recomputed from an identical request.
    """
    return [_canonical(value) for value in signature]


def signatures_match(stored: Sequence[Any], current: Sequence[Any]) -> bool:
    """Element-wise value equality; length and order are significant."""
    return canonical_signature(stored) == canonical_signature(current)


class DefaultOwnershipSignature:
    """Signature built from a fixed, ordered list of request attribute names."""

    def __init__(self, attributes: Sequence[str] = ()) -> None:
        self._attributes: tuple[str, ...] = tuple(attributes)

    @property
    def attributes(self) -> tuple[str, ...]:
        return self._attributes

    def __call__(self, request: AttributeSource) -> Signature:
        return compute_signature(request, self._attributes)

    def __repr__(self) -> str:
        return f"DefaultOwnershipSignature({list(self._attributes)!r})"
