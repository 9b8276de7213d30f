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
"""Tests for ownership signature computation and comparison."""

from __future__ import annotations

import json

from orion.session.signature import (
    AttributeSource,
    DefaultOwnershipSignature,
    canonical_signature,
    compute_signature,
    signatures_match,
)


class FakeRequest:
    """AttributeSource over a plain dict; missing names resolve to None."""

    def __init__(self, **attributes) -> None:
        self._attributes = attributes

    def get_attribute(self, name: str):
        return self._attributes.get(name)


class TestComputeSignature:
    def test_fake_request_is_attribute_source(self):
        assert isinstance(FakeRequest(), AttributeSource)

    def test_values_follow_attribute_order(self):
        request = FakeRequest(ip="1.2.3.4", agent="curl/8")
        assert compute_signature(request, ["ip", "agent"]) == ("1.2.3.4", "curl/8")
        assert compute_signature(request, ["agent", "ip"]) == ("curl/8", "1.2.3.4")

    def test_identical_attribute_values_give_equal_signatures(self):
        names = ["ip", "agent"]
        first = FakeRequest(ip="1.2.3.4", agent="curl/8", unrelated="a")
        second = FakeRequest(ip="1.2.3.4", agent="curl/8", unrelated="b")
        assert compute_signature(first, names) == compute_signature(second, names)

    def test_one_differing_attribute_changes_signature(self):
        names = ["ip", "agent"]
        first = FakeRequest(ip="1.2.3.4", agent="curl/8")
        second = FakeRequest(ip="1.2.3.4", agent="curl/9")
        assert compute_signature(first, names) != compute_signature(second, names)

    def test_missing_attribute_is_none_not_empty_string(self):
        assert compute_signature(FakeRequest(), ["ip"]) == (None,)

    def test_missing_matches_missing_but_not_empty_string(self):
        names = ["ip"]
        missing = compute_signature(FakeRequest(), names)
        also_missing = compute_signature(FakeRequest(other="x"), names)
        empty = compute_signature(FakeRequest(ip=""), names)
        assert missing == also_missing
        assert missing != empty

    def test_empty_attribute_set_gives_empty_signature(self):
        assert compute_signature(FakeRequest(ip="1.2.3.4"), []) == ()

    def test_empty_attribute_set_matches_any_request(self):
        first = compute_signature(FakeRequest(ip="1.2.3.4"), [])
        second = compute_signature(FakeRequest(ip="5.6.7.8", agent="x"), [])
        assert signatures_match(first, second)

    def test_repeated_computation_is_deterministic(self):
        request = FakeRequest(ip="1.2.3.4")
        assert compute_signature(request, ["ip"]) == compute_signature(request, ["ip"])


class TestSignaturesMatch:
    def test_stored_list_matches_tuple(self):
        assert signatures_match(["1.2.3.4", None], ("1.2.3.4", None))

    def test_nested_sequences_match_after_json_round_trip(self):
        current = compute_signature(FakeRequest(forwarded=("10.0.0.1", "10.0.0.2")), ["forwarded"])
        stored = json.loads(json.dumps(canonical_signature(current)))
        assert signatures_match(stored, current)

    def test_canonical_form_is_json_shaped(self):
        signature = (("a", ("b",)), {1: ("x",)}, None, 7)
        assert canonical_signature(signature) == [["a", ["b"]], {"1": ["x"]}, None, 7]

    def test_nested_values_still_differ(self):
        assert not signatures_match([["10.0.0.1", "10.0.0.2"]], (("10.0.0.2", "10.0.0.1"),))

    def test_length_is_significant(self):
        assert not signatures_match(["1.2.3.4"], ("1.2.3.4", None))

    def test_order_is_significant(self):
        assert not signatures_match(["a", "b"], ("b", "a"))


class TestDefaultOwnershipSignature:
    def test_uses_configured_attributes(self):
        signature = DefaultOwnershipSignature(["ip"])
        assert signature(FakeRequest(ip="1.2.3.4", agent="x")) == ("1.2.3.4",)

    def test_attributes_are_frozen(self):
        names = ["ip"]
        signature = DefaultOwnershipSignature(names)
        names.append("agent")
        assert signature.attributes == ("ip",)

    def test_defaults_to_no_attributes(self):
        assert DefaultOwnershipSignature()(FakeRequest(ip="1.2.3.4")) == ()
