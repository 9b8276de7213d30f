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
"""Orion Session — server-side sessions with ownership (anti-hijacking) checks.

Import concrete store types from the adapter package::

    from orion.session.adapters.cache import CacheSessionStore
"""

from orion.session.attributes import RequestAttributes
from orion.session.errors import StoreUnavailableError
from orion.session.filter import SessionFilter
from orion.session.lifecycle import SessionLifecycleController
from orion.session.ports.outbound import SessionStore
from orion.session.properties import SessionCookie, SessionProperties, SessionSettings
from orion.session.session import HttpSession, SessionState
from orion.session.signature import (
    AttributeSource,
    DefaultOwnershipSignature,
    OwnershipSignature,
    Signature,
    canonical_signature,
    compute_signature,
    signatures_match,
)

__all__ = [
    "AttributeSource",
    "DefaultOwnershipSignature",
    "HttpSession",
    "OwnershipSignature",
    "RequestAttributes",
    "SessionCookie",
    "SessionFilter",
    "SessionLifecycleController",
    "SessionProperties",
    "SessionSettings",
    "SessionState",
    "SessionStore",
    "Signature",
    "StoreUnavailableError",
    "canonical_signature",
    "compute_signature",
    "signatures_match",
]
