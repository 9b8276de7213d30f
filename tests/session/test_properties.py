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
"""Tests for session properties, cookie parameters, and settings."""

from __future__ import annotations

import pytest

from orion.core.config import Config
from orion.session.properties import SessionCookie, SessionProperties, SessionSettings


class TestSessionProperties:
    def test_defaults(self):
        props = Config({}).bind(SessionProperties)
        assert props.id_prefix == "ellipse_"
        assert props.ttl == 7200
        assert props.cookie == {}
        assert props.cache["provider"] == "filesystem"
        assert props.attributes == ()

    def test_bind_hyphenated_keys(self):
        config = Config({"orion": {"session": {"id-prefix": "app_", "exclude-paths": ["/static/*"]}}})
        props = config.bind(SessionProperties)
        assert props.id_prefix == "app_"
        assert props.exclude_paths == ["/static/*"]

    def test_attributes_keep_order(self):
        props = SessionProperties(ownership={"attributes": ["user_agent", "client_ip"]})
        assert props.attributes == ("user_agent", "client_ip")

    def test_attributes_from_comma_string(self):
        props = SessionProperties(ownership={"attributes": "client_ip, user_agent"})
        assert props.attributes == ("client_ip", "user_agent")


class TestSessionCookie:
    def test_empty_mapping_gives_defaults(self):
        assert SessionCookie.from_mapping({}) == SessionCookie()
        assert SessionCookie.from_mapping(None).name == "ORION_SESSION"

    def test_hyphenated_and_unknown_keys(self):
        cookie = SessionCookie.from_mapping({"max-age": 300, "httponly": False, "lifetime": 5})
        assert cookie.max_age == 300
        assert cookie.httponly is False


class TestSessionSettings:
    def test_attributes_become_tuple(self):
        assert SessionSettings(attributes=["a", "b"]).attributes == ("a", "b")

    def test_settings_are_immutable(self):
        settings = SessionSettings()
        with pytest.raises(AttributeError):
            settings.ttl = 5  # type: ignore[misc]

    def test_string_attributes_rejected(self):
        with pytest.raises(TypeError):
            SessionSettings(attributes="client_ip")  # type: ignore[arg-type]

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_non_positive_ttl_rejected(self, ttl):
        with pytest.raises(ValueError):
            SessionSettings(ttl=ttl)

    def test_from_properties(self):
        props = SessionProperties(id_prefix="p_", ttl=30, ownership={"attributes": ["client_ip"]})
        assert SessionSettings.from_properties(props) == SessionSettings(("client_ip",), "p_", 30)
