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
"""Tests for conditional_on_missing_bean evaluation."""

from typing import Any, Protocol, runtime_checkable

from orion.container import Container
from orion.context.condition_evaluator import ConditionEvaluator
from orion.context.annotations import conditional_on_missing_bean


@runtime_checkable
class Store(Protocol):
    def load(self, key: str) -> Any: ...


class Signer(Protocol):
    def __call__(self, request: Any) -> Any: ...


class FileStore:
    def load(self, key: str) -> Any:
        return None


@conditional_on_missing_bean(Store)
class DefaultStoreConfiguration:
    pass


@conditional_on_missing_bean(Signer)
class DefaultSignerConfiguration:
    pass


class TestConditionalOnMissingBean:
    def test_marks_class(self):
        cond = DefaultStoreConfiguration.__orion_conditions__
        assert cond == [{"type": "on_missing_bean", "bean_type": Store}]

    def test_included_when_nothing_registered(self):
        container = Container()
        container.register(DefaultStoreConfiguration)
        evaluator = ConditionEvaluator(container)
        assert evaluator.should_include(DefaultStoreConfiguration, bean_pass=True)

    def test_excluded_by_bean_registered_under_protocol(self):
        container = Container()
        container.register(Store, instance=FileStore())
        assert not ConditionEvaluator(container).should_include(DefaultStoreConfiguration, bean_pass=True)

    def test_excluded_by_structural_implementation(self):
        container = Container()
        container.register(FileStore)
        assert not ConditionEvaluator(container).should_include(DefaultStoreConfiguration, bean_pass=True)

    def test_non_runtime_protocol_needs_exact_key(self):
        container = Container()
        container.register(FileStore)
        evaluator = ConditionEvaluator(container)
        assert evaluator.should_include(DefaultSignerConfiguration, bean_pass=True)

        container.register(Signer, instance=lambda request: ())
        assert not evaluator.should_include(DefaultSignerConfiguration, bean_pass=True)

    def test_ignored_in_first_pass(self):
        container = Container()
        container.register(FileStore)
        assert ConditionEvaluator(container).should_include(DefaultStoreConfiguration, bean_pass=False)

    def test_stereotype_condition_in_first_pass(self):
        class Disabled:
            __orion_condition__ = staticmethod(lambda: False)

        assert not ConditionEvaluator(Container()).should_include(Disabled)
