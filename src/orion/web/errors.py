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
"""Global exception handler — every error becomes a JSON body with a mapped status."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from orion.kernel.exceptions import (
    BusinessException,
    InfrastructureException,
    OrionException,
    SecurityException,
    ServiceUnavailableException,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses come before their parents.
_STATUS_BY_TYPE: tuple[tuple[type[Exception], int], ...] = (
    (ServiceUnavailableException, 503),
    (InfrastructureException, 502),
    (SecurityException, 401),
    (BusinessException, 400),
)


def get_status_code(exc: Exception) -> int:
    """HTTP status for *exc*; anything unmapped is a 500."""
    return next((status for exc_type, status in _STATUS_BY_TYPE if isinstance(exc, exc_type)), 500)


def _error_body(request: Request, exc: Exception, status: int) -> dict[str, Any]:
    body: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "status": status,
        "path": request.url.path,
    }
    if isinstance(exc, OrionException):
        body["message"] = str(exc)
        body["code"] = exc.code or type(exc).__name__
        if exc.context:
            body["context"] = exc.context
    else:
        # internal details stay in the log
        body["message"] = "Internal server error"
        body["code"] = "INTERNAL_ERROR"
    return body


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render *exc* as ``{"error": {...}}``.

    Orion errors carry their message, code and context. Any other error
    is logged with its traceback and reported as ``INTERNAL_ERROR``.
    """
    status = get_status_code(exc)
    if isinstance(exc, OrionException):
        logger.warning("%s %s failed with %s: %s", request.method, request.url.path, status, exc)
    else:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": _error_body(request, exc, status)}, status_code=status)
