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
"""Tests for Config loading, overrides, placeholders, and binding."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from orion.core.config import Config, config_properties, deep_merge, env_key


@config_properties(prefix="orion.store")
@dataclass
class StoreProperties:
    url: str = "memory://"
    pool_size: int = 5
    timeout: float = 1.0
    enabled: bool = False
    hosts: list = field(default_factory=list)


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"orion": {"session": {"ttl": 60}}})
        assert config.get("orion.session.ttl") == 60

    def test_get_with_default(self):
        assert Config({}).get("orion.missing", "fallback") == "fallback"

    def test_get_section(self):
        config = Config({"orion": {"session": {"ttl": 60}}})
        assert config.get_section("orion.session") == {"ttl": 60}
        assert config.get_section("orion.nothing") == {}

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("ORION_SESSION_ID_PREFIX", "env_")
        config = Config({"orion": {"session": {"id-prefix": "file_"}}})
        assert config.get("orion.session.id-prefix") == "env_"

    def test_placeholder_from_env(self, monkeypatch):
        monkeypatch.setenv("SESSION_DIR", "/var/lib/sessions")
        config = Config({"orion": {"session": {"cache": {"path": "${SESSION_DIR}"}}}})
        assert config.get("orion.session.cache.path") == "/var/lib/sessions"

    def test_placeholder_default_and_reference(self):
        config = Config({
            "base": "/srv",
            "orion": {"a": "${base}/sessions", "b": "${UNSET_ORION_VAR:/tmp}"},
        })
        assert config.get("orion.a") == "/srv/sessions"
        assert config.get("orion.b") == "/tmp"

    def test_unresolvable_placeholder(self):
        config = Config({"orion": {"a": "${UNSET_ORION_VAR_2}"}})
        with pytest.raises(ValueError):
            config.get("orion.a")

    def test_circular_placeholder(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError):
            config.get("a")


class TestConfigFiles:
    def test_framework_defaults(self):
        defaults = Config(Config.load_framework_defaults())
        assert defaults.get("orion.session.id-prefix") == "ellipse_"
        assert defaults.get("orion.session.ttl") == 7200
        assert defaults.get("orion.session.ownership.attributes") == []

    def test_from_file_merges_over_defaults(self, tmp_path: Path):
        path = tmp_path / "orion.yaml"
        path.write_text("orion:\n  session:\n    ttl: 600\n")
        config = Config.from_file(path)
        assert config.get("orion.session.ttl") == 600
        assert config.get("orion.session.id-prefix") == "ellipse_"
        assert config.loaded_sources[-1] == str(path)

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "orion.toml"
        path.write_text('[orion.session]\nttl = 300\n')
        assert Config.from_file(path, load_defaults=False).get("orion.session.ttl") == 300

    def test_from_sources_with_profile(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "orion.yaml").write_text("orion:\n  session:\n    ttl: 600\n    id-prefix: app_\n")
        (tmp_path / "orion-prod.yaml").write_text("orion:\n  session:\n    ttl: 900\n")

        config = Config.from_sources(tmp_path, active_profiles=["prod"])

        assert config.get("orion.session.ttl") == 900
        assert config.get("orion.session.id-prefix") == "app_"
        assert len(config.loaded_sources) == 3


class TestBind:
    def test_bind_values(self):
        config = Config({"orion": {"store": {"url": "redis://x", "pool-size": 20}}})
        props = config.bind(StoreProperties)
        assert props.url == "redis://x"
        assert props.pool_size == 20

    def test_bind_defaults(self):
        props = Config({}).bind(StoreProperties)
        assert props == StoreProperties()

    def test_env_values_are_coerced(self, monkeypatch):
        monkeypatch.setenv("ORION_STORE_POOL_SIZE", "7")
        monkeypatch.setenv("ORION_STORE_TIMEOUT", "2.5")
        monkeypatch.setenv("ORION_STORE_ENABLED", "yes")
        monkeypatch.setenv("ORION_STORE_HOSTS", "a, b,,c")
        props = Config({}).bind(StoreProperties)
        assert props.pool_size == 7
        assert props.timeout == 2.5
        assert props.enabled is True
        assert props.hosts == ["a", "b", "c"]

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError):
            Config({}).bind(Plain)


class TestHelpers:
    def test_deep_merge_keeps_sibling_keys(self):
        base = {"orion": {"session": {"ttl": 10, "id-prefix": "a_"}}}
        merged = deep_merge(base, {"orion": {"session": {"ttl": 20}}})
        assert merged == {"orion": {"session": {"ttl": 20, "id-prefix": "a_"}}}
        assert base["orion"]["session"]["ttl"] == 10

    def test_deep_merge_replaces_non_dict_values(self):
        assert deep_merge({"a": {"b": 1}}, {"a": [1, 2]}) == {"a": [1, 2]}

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("orion.session.ttl", "ORION_SESSION_TTL"),
            ("orion.session.id-prefix", "ORION_SESSION_ID_PREFIX"),
            ("app.name", "ORION_APP_NAME"),
        ],
    )
    def test_env_key(self, key, expected):
        assert env_key(key) == expected
