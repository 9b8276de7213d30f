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
"""Tests for the global JSON exception handler."""

import pytest
from starlette.routing import Route
from starlette.testclient import TestClient

from orion.cache.errors import CacheSerializationError
from orion.kernel.exceptions import (
    BusinessException,
    InfrastructureException,
    SecurityException,
)
from orion.session.errors import StoreUnavailableError
from orion.web import create_app
from orion.web.errors import get_status_code


def raiser(exc: Exception):
    async def endpoint(request):
        raise exc

    return endpoint


def make_test_app():
    return create_app([
        Route("/store", raiser(StoreUnavailableError("get", "connection refused"))),
        Route("/business", raiser(BusinessException("Bad input", code="BAD_INPUT"))),
        Route("/crash", raiser(RuntimeError("secret detail"))),
    ])


class TestGetStatusCode:
    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (StoreUnavailableError("save", "x"), 503),
            (SecurityException("no"), 401),
            (BusinessException("no"), 400),
            (InfrastructureException("no"), 502),
            (CacheSerializationError("x"), 500),
            (KeyError("x"), 500),
        ],
    )
    def test_mapping(self, exc, status):
        assert get_status_code(exc) == status


class TestGlobalExceptionHandler:
    def setup_method(self):
        self.client = TestClient(make_test_app(), raise_server_exceptions=False)

    def test_store_outage_returns_503(self):
        resp = self.client.get("/store")
        assert resp.status_code == 503
        error = resp.json()["error"]
        assert error["code"] == "SESSION_STORE_UNAVAILABLE"
        assert error["context"] == {"operation": "get"}
        assert error["path"] == "/store"
        assert "timestamp" in error

    def test_business_error(self):
        resp = self.client.get("/business")
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Bad input"
        assert "context" not in resp.json()["error"]

    def test_unexpected_error_hides_details(self):
        resp = self.client.get("/crash")
        assert resp.status_code == 500
        error = resp.json()["error"]
        assert error["code"] == "INTERNAL_ERROR"
        assert "secret" not in error["message"]
