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
"""Tests for HttpSession."""

from __future__ import annotations

import pytest

from orion.session.session import SIGNATURE_KEY, HttpSession, SessionState


class TestHttpSession:
    def test_new_session_has_timestamps(self):
        session = HttpSession("abc", is_new=True, now=100.0)
        assert session.created_at == 100.0
        assert session.last_accessed == 100.0
        assert session.is_new
        assert session.state is SessionState.STARTED

    def test_loaded_session_keeps_creation_time(self):
        session = HttpSession("abc", {"_created_at": 50.0, "_last_accessed": 60.0}, now=100.0)
        assert session.created_at == 50.0
        assert session.last_accessed == 100.0

    def test_attribute_accessors(self):
        session = HttpSession("abc")
        session.set_attribute("user", "alice")
        assert session.get_attribute("user") == "alice"
        assert session.get_attribute("missing") is None
        session.remove_attribute("user")
        session.remove_attribute("user")
        assert session.get_attribute("user") is None

    def test_attribute_names_hide_metadata(self):
        session = HttpSession("abc")
        session.set_attribute("user", "alice")
        session.attach_signature(("1.2.3.4",))
        assert session.get_attribute_names() == ["user"]

    def test_signature_is_stored_as_list_and_read_as_tuple(self):
        session = HttpSession("abc")
        assert session.signature is None
        session.attach_signature(("1.2.3.4", None))
        assert session.get_data()[SIGNATURE_KEY] == ["1.2.3.4", None]
        assert session.signature == ("1.2.3.4", None)

    def test_signature_cannot_be_overwritten(self):
        session = HttpSession("abc")
        session.attach_signature(("1.2.3.4",))
        with pytest.raises(RuntimeError):
            session.attach_signature(("5.6.7.8",))
        assert session.signature == ("1.2.3.4",)

    def test_invalidate(self):
        session = HttpSession("abc")
        session.invalidate()
        assert session.invalidated
        assert session.state is SessionState.INVALIDATED

    def test_regenerate_id_only_flags_request(self):
        session = HttpSession("abc")
        session.regenerate_id()
        assert session.regeneration_requested
        assert session.id == "abc"
